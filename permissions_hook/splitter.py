"""Split compound shell commands into top-level segments.

This is not a shell parser. It only tracks quoting and backslash escapes
well enough to find the list/pipeline operators that separate commands.
"""

import functools


def _split_respecting_quotes(text, is_delimiter):
    """Split text on unquoted delimiters while respecting quotes and escapes.

    is_delimiter(text, i) -> int or None:
        Return the number of chars to skip (the delimiter width) if position i
        is a delimiter, or None if it is not.

    Segments are returned untrimmed and in order. Segments between adjacent
    delimiters are kept even when blank; the final segment is kept only if
    it has non-whitespace content.
    """
    parts = []
    current = []
    in_single = False
    in_double = False
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == "\\" and not in_single:
            # Escape: copy it and the next char verbatim, no interpretation
            current.append(text[i : i + 2])
            i += 2
            continue
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif not in_single and not in_double:
            skip = is_delimiter(text, i)
            if skip is not None:
                parts.append("".join(current))
                current = []
                i += skip
                continue
        current.append(c)
        i += 1
    tail = "".join(current)
    if tail.strip():
        parts.append(tail)
    return parts


def _is_command_delimiter(text, i):
    """Command delimiter: &&, ||, | and ;."""
    two = text[i : i + 2]
    if two in ("&&", "||"):
        return 2
    if text[i] in ("|", ";"):
        return 1
    return None


split_compound_command = functools.partial(
    _split_respecting_quotes, is_delimiter=_is_command_delimiter
)
