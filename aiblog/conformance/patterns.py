"""
Package identifiers for matching dotted module names.

Syntax:
    ``..service..``        any module with a ``service`` segment
    ``aiblog.domain..``    ``aiblog.domain`` and everything below it
    ``..ai.adapter..``     consecutive ``ai.adapter`` segments anywhere
    ``aiblog.domain.(*)..`` captures the segment after ``aiblog.domain``
    ``*``                  exactly one segment
"""

import re
from functools import lru_cache
from typing import Optional

_SEGMENT = r"[^.]+"


@lru_cache(maxsize=None)
def _compile(identifier: str) -> "re.Pattern[str]":
    if not identifier or identifier == "..":
        raise ValueError(f"Invalid package identifier: {identifier!r}")

    core = identifier
    leading = core.startswith("..")
    trailing = core.endswith("..")
    if leading:
        core = core[2:]
    if trailing:
        core = core[:-2]
    if not core or ".." in core:
        raise ValueError(f"Invalid package identifier: {identifier!r}")

    parts = []
    for segment in core.split("."):
        if segment == "(*)":
            parts.append(f"({_SEGMENT})")
        elif segment == "*":
            parts.append(_SEGMENT)
        else:
            parts.append(re.escape(segment))
    body = r"\.".join(parts)

    prefix = r"(?:.+\.)?" if leading else ""
    suffix = r"(?:\..+)?" if trailing else ""
    return re.compile(f"^{prefix}{body}{suffix}$")


class PackageMatcher:
    """Matches dotted module names against a package identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        self._pattern = _compile(identifier)

    def matches(self, module: str) -> bool:
        return self._pattern.match(module) is not None

    def capture(self, module: str) -> Optional[str]:
        """Return the ``(*)`` capture for ``module``, or None if it does not match."""
        match = self._pattern.match(module)
        if match is None:
            return None
        return match.group(1) if match.groups() else module

    def __repr__(self) -> str:
        return f"PackageMatcher({self.identifier!r})"

