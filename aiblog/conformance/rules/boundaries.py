"""
Forbidden dependencies between packages.

Used for the hexagonal boundary of the AI integration: domain logic and
ports reach concrete adapters only through the port abstraction.
"""

from aiblog.conformance.codebase import CodeBase
from aiblog.conformance.patterns import PackageMatcher
from aiblog.conformance.rules.base import Rule, Violation


class ForbiddenDependencyRule(Rule):
    """Modules matching ``source`` must not depend on modules matching ``target``."""

    def __init__(self, name: str, source: str, target: str, reason: str = "") -> None:
        self.name = name
        self.source = PackageMatcher(source)
        self.target = PackageMatcher(target)
        self.reason = reason
        self.description = f"No dependencies from {source} to {target}"

    def check(self, codebase: CodeBase) -> list[Violation]:
        violations = []
        for dependency in codebase.dependencies():
            if not self.source.matches(dependency.origin):
                continue
            if not self.target.matches(dependency.target):
                continue
            message = (
                f"{dependency.origin} depends on {dependency.target} "
                f"('{self.source.identifier}' must not access '{self.target.identifier}')"
            )
            if self.reason:
                message += f": {self.reason}"
            violations.append(self.violation(dependency.origin, message, dependency.line))
        return violations
