r"""
Argkit tokenizer: turn a raw command line string into tokens.

Overview
- split(string): whitespace-separated tokens, honoring double-quote grouping
  and backslash escapes. Quote characters stay in the token text so that the
  parsing layer can later tell a fully-quoted token apart and strip it.
- unquote(string): remove one matching pair of surrounding double quotes and
  unescape the \" and \\ sequences inside them.

The tokenizer knows nothing about dashes, '=' or '--'; that belongs to
argkit.parsing.

Quick example
    >>> split('cp "my file.txt" dest\\')
    ['cp', '"my file.txt"', 'dest\\']
    >>> unquote('"my file.txt"')
    'my file.txt'
"""
import re

QUOTE = "\""
ESCAPE = "\\"
WHITESPACE = frozenset(" \t\n\r")


def split(string, /):
    """
    Split a command line into raw tokens.

    Rules (scanned character by character)
    - whitespace: literal inside quotes or right after a backslash; otherwise it
      closes the current token. Empty tokens are never emitted.
    - '"': literal when escaped (quote state unchanged); otherwise toggles the
      quoted state. Either way the character is kept in the token.
    - '\\': an escape marker for the next character; two in a row collapse to a
      single literal backslash. An escape marker before an ordinary character is
      dropped.
    - anything else: literal.

    Degradation
    - an unbalanced quote runs to the end of the input.
    - a trailing backslash with nothing to escape is kept as-is.

    Parameters
    - string: str

    Returns
    - list[str] of raw tokens (possibly empty).
    """
    if not isinstance(string, str):
        raise TypeError("split() argument must be a string")

    tokens = []
    current = ""
    quoted = False
    escaped = False

    for char in string:
        if char in WHITESPACE:
            if quoted or escaped:
                current += char
            elif current:
                tokens.append(current)
                current = ""
            escaped = False
        elif char == QUOTE:
            current += char
            if not escaped:
                quoted = not quoted
            escaped = False
        elif char == ESCAPE:
            if escaped:
                current += char
            escaped = not escaped
        else:
            current += char
            escaped = False

    # nothing left to escape
    if escaped:
        current += ESCAPE

    if current:
        tokens.append(current)

    return tokens


_UNESCAPE = re.compile(r"\\([\"\\])")


def unquote(string, /):
    r"""
    Strip one pair of surrounding double quotes, unescaping \" and \\ inside.

    Strings that are not fully quoted (shorter than two characters, or missing
    either quote) are returned unchanged, escapes included. Other backslash
    sequences are left alone.

    Examples
    - unquote('"a b"')        -> 'a b'
    - unquote('""')           -> ''
    - unquote('"a \\" b"')    -> 'a " b'
    - unquote('"half')        -> '"half'
    """
    if not isinstance(string, str):
        raise TypeError("unquote() argument must be a string")
    if len(string) >= 2 and string.startswith(QUOTE) and string.endswith(QUOTE):
        return _UNESCAPE.sub(r"\1", string[1:-1])
    return string


__all__ = (
    "split",
    "unquote",
)
