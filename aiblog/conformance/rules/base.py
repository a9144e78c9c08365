"""
Rule contract for the conformance checker.

A rule inspects a CodeBase and returns one Violation per offending
symbol. Rules are independent: they never mutate the CodeBase and
never depend on the outcome of another rule.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from aiblog.conformance.codebase import CodeBase


@dataclass(frozen=True)
class Violation:
    """A single rule violation.

    Attributes:
        rule: Name of the rule that produced it.
        symbol: Dotted name of the offending module, class or field.
        message: Plain-text description.
        line: Source line, when known.
    """

    rule: str
    symbol: str
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        location = f" (line {self.line})" if self.line is not None else ""
        return f"[{self.rule}] {self.message}{location}"


class Rule(ABC):
    """Base class for all conformance rules."""

    name: str = "rule"
    description: str = ""

    @abstractmethod
    def check(self, codebase: CodeBase) -> list[Violation]:
        """Return every violation of this rule in ``codebase``."""
        raise NotImplementedError

    def violation(self, symbol: str, message: str, line: Optional[int] = None) -> Violation:
        return Violation(rule=self.name, symbol=symbol, message=message, line=line)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
