"""Utility functions for scopeconf."""

Sections = dict[str, dict[str, str]]


def split_key(name: str) -> tuple[str, str]:
    """Split a fully-qualified key into its section and key parts.

    The section part keeps any subsection: ``remote.origin.url`` splits into
    ``("remote.origin", "url")``. Section and key names are case-insensitive
    and returned lower-case; subsections are case-sensitive.

    Raises:
        ValueError: If name has no section part or no key part

    Examples:
        >>> split_key("core.bare")
        ('core', 'bare')

        >>> split_key("Remote.Origin.URL")
        ('remote.Origin', 'url')
    """
    section, sep, key = name.rpartition(".")
    if not sep or not section or not key:
        raise ValueError(f"Key '{name}' must be of the form section.key")
    return normalize_section(section), key.lower()


def normalize_section(section: str) -> str:
    """Lower-case the section name, leaving a subsection untouched."""
    name, sep, subsection = section.partition(".")
    return name.lower() + sep + subsection


def overlay_sections(base: Sections, overlay: Sections) -> Sections:
    """Overlay one sections mapping onto another, key by key.

    A key in overlay replaces the same key in base; keys that only base
    holds survive even when overlay has the same section.

    Args:
        base: Lower-precedence sections
        overlay: Higher-precedence sections

    Returns:
        New merged mapping (base and overlay are not modified)

    Examples:
        >>> base = {"core": {"bare": "false", "editor": "vi"}}
        >>> overlay = {"core": {"bare": "true"}, "user": {"name": "Alice"}}
        >>> overlay_sections(base, overlay)
        {'core': {'bare': 'true', 'editor': 'vi'}, 'user': {'name': 'Alice'}}
    """
    result = {section: dict(keys) for section, keys in base.items()}

    for section, keys in overlay.items():
        result.setdefault(section, {}).update(keys)

    return result
