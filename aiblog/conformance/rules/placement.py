"""
Class placement by naming convention.

A class named ``...Service`` inside the domain namespace must live in a
module under the ``service`` segment, and likewise for the other layers.
"""

from aiblog.conformance.codebase import CodeBase
from aiblog.conformance.patterns import PackageMatcher
from aiblog.conformance.rules.base import Rule, Violation


class ClassPlacementRule(Rule):
    """Classes ending with ``suffix`` under ``scope`` must reside in ``required``."""

    def __init__(
        self,
        suffix: str,
        scope: str,
        required: str,
        include_abstract: bool = True,
    ) -> None:
        self.suffix = suffix
        self.scope = PackageMatcher(scope)
        self.required = PackageMatcher(required)
        self.include_abstract = include_abstract
        self.name = f"{suffix.lower()}-placement"
        self.description = f"{suffix} classes in {scope} reside in {required}"

    def check(self, codebase: CodeBase) -> list[Violation]:
        violations = []
        for cls in codebase.classes():
            if not cls.name.endswith(self.suffix):
                continue
            if not self.scope.matches(cls.module):
                continue
            if not self.include_abstract and cls.is_abstract:
                continue
            if self.required.matches(cls.module):
                continue
            violations.append(
                self.violation(
                    cls.qualified_name,
                    f"{cls.qualified_name} should reside in a module matching "
                    f"'{self.required.identifier}'",
                    cls.line,
                )
            )
        return violations
