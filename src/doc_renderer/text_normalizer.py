"""Resolution of C-style backslash escapes in description text.

Postman exports descriptions with C-style escapes (for example ``\\"``),
which must be turned back into literal characters before they are written
to Markdown.
"""

import re

_SIMPLE_ESCAPES = {
    b'a': b'\a',
    b'b': b'\b',
    b'f': b'\f',
    b'n': b'\n',
    b'r': b'\r',
    b't': b'\t',
    b'v': b'\v',
}

# A backslash at the very end has nothing to escape and is left alone
_ESCAPE = re.compile(rb'\\(?:([0-7]{1,3})|x([0-9A-Fa-f]{1,2})|(.))', re.DOTALL)


def _replace(match: re.Match) -> bytes:
    octal, hexa, char = match.groups()
    if octal is not None:
        return bytes([int(octal, 8) & 0xFF])
    if hexa is not None:
        return bytes([int(hexa, 16)])
    return _SIMPLE_ESCAPES.get(char, char)


def unescape(text: str) -> str:
    """Resolve C-style escape sequences into literal characters.

    Recognized sequences are ``\\a \\b \\f \\n \\r \\t \\v``, octal
    ``\\ooo`` and hex ``\\xhh``. Any other escaped character stands for
    itself (``\\"`` becomes ``"``, ``\\\\`` becomes ``\\``) and a trailing
    lone backslash is kept.

    Octal and hex escapes stand for bytes, so a run of them can spell a
    multi-byte UTF-8 character (``\\303\\251`` is ``é``). Bytes that do not
    decode as UTF-8 become U+FFFD.

    Args:
        text: Raw description text

    Returns:
        Text with every escape sequence resolved

    Examples:
        >>> unescape('say \\\\"hi\\\\"')
        'say "hi"'
    """
    if '\\' not in text:
        return text
    raw = _ESCAPE.sub(_replace, text.encode('utf-8', errors='surrogatepass'))
    return raw.decode('utf-8', errors='replace')
