"""Variable reference expansion."""

from __future__ import annotations

import re
from typing import Mapping

from envweave.environ import EnvironmentStore

VARIABLE_PATTERN = re.compile(r"(\\)?(\$)(\{?([A-Z0-9_]+)\}?)")


def expand_value(value: str, env: Mapping[str, str], store: EnvironmentStore) -> str:
    """Substitute the first variable reference in ``value``.

    Names resolve against ``env`` (the variables parsed so far) and then
    ``store``; an unknown name expands to an empty string. Only the first
    reference is replaced and the result is not expanded again. A reference
    preceded by a backslash is kept literally, minus the backslash.
    """
    match = VARIABLE_PATTERN.search(value)
    if match is None:
        return value

    escape, dollar, reference, name = match.groups()
    if escape:
        replacement = dollar + reference
    elif name in env:
        replacement = env[name]
    else:
        replacement = store.get(name) or ""
    return value[: match.start()] + replacement + value[match.end() :]
