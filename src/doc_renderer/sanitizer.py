"""Path segment sanitization for collection item names.

This module turns Postman item names into directory and file names. Only
path separators are removed; every other character, including spaces and
case, is preserved so that document paths stay recognizable to people
searching the issue tracker.
"""

import re

_SEPARATORS = re.compile(r'[/\\]')


def sanitize(name: str) -> str:
    """Remove every forward and back slash from a name.

    Sanitization is idempotent and never introduces new characters, so two
    names differing only by slashes map to the same segment.

    Args:
        name: Item name as entered in Postman

    Returns:
        The name without path separators

    Examples:
        >>> sanitize("Users / Create")
        'Users  Create'
        >>> sanitize("a\\\\b")
        'ab'
    """
    return _SEPARATORS.sub('', name)


def markdown_filename(name: str) -> str:
    """Build the Markdown file name for an item name."""
    return f"{sanitize(name)}.md"
