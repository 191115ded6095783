"""Placeholder substitution for code templates.

Tokens look like ``___NAME___``. Each bound token is replaced literally in a
single pass; replacement text is never scanned for further tokens.
"""

import re

TOKEN_DELIMITER = "___"

_EMPTY_LINES_RE = re.compile(r"^\n+", re.MULTILINE)


def token(name: str) -> str:
    return f"{TOKEN_DELIMITER}{name}{TOKEN_DELIMITER}"


def render_template(template: str, bindings: dict[str, object]) -> str:
    """Replace every ``___NAME___`` token bound in ``bindings``.

    Tokens without a binding are left in place.
    """
    if not bindings:
        return template
    # Longest first so a token never shadows a longer one
    names = sorted(bindings, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(token(name)) for name in names))
    values = {token(name): str(value) for name, value in bindings.items()}
    return pattern.sub(lambda m: values[m.group(0)], template)


def strip_empty_lines(text: str) -> str:
    """Remove empty lines, e.g. those left by optional sections that rendered empty."""
    return _EMPTY_LINES_RE.sub("", text)
