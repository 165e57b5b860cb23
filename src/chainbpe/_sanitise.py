"""
Utilities for rendering token values as single-line displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_value(value: str) -> str:
    """
    Escape control characters in a token value.

    Newlines, tabs and other control characters become ``\\uXXXX`` escapes
    so a merged value such as ``"e\\n"`` prints on one line.
    """
    return _escape_ctrl_chars(value)


def render_pair(left: str, right: str) -> str:
    """Render a value pair as ``'left' + 'right'`` for log lines."""
    return f"{render_value(left)!r} + {render_value(right)!r}"
