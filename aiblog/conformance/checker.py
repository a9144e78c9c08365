"""
Runs a set of rules against a scanned package and collects the outcome.

Every rule runs regardless of the others; the report fails when any
rule reports at least one violation.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from aiblog.conformance.codebase import CodeBase, scan_package
from aiblog.conformance.policy import default_rules
from aiblog.conformance.rules import Rule, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleResult:
    rule: str
    description: str
    violations: tuple[Violation, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.violations


@dataclass(frozen=True)
class ConformanceReport:
    """Outcome of a conformance run."""

    package: str
    results: tuple[RuleResult, ...]

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def violations(self) -> list[Violation]:
        return [violation for result in self.results for violation in result.violations]

    @property
    def failed_rules(self) -> list[str]:
        return [result.rule for result in self.results if not result.passed]

    def result(self, rule: str) -> RuleResult:
        for result in self.results:
            if result.rule == rule:
                return result
        raise KeyError(rule)

    def format(self) -> str:
        """Render the report as plain text, one line per violation."""
        if self.passed:
            return f"{self.package}: {len(self.results)} rules passed"
        lines = [f"{self.package}: {len(self.violations)} violation(s) in {len(self.failed_rules)} rule(s)"]
        lines.extend(str(violation) for violation in self.violations)
        return "\n".join(lines)


def check(codebase: CodeBase, rules: Optional[Sequence[Rule]] = None) -> ConformanceReport:
    """Run ``rules`` (default policy when omitted) against ``codebase``."""
    if rules is None:
        rules = default_rules(codebase.package)

    results = []
    for rule in rules:
        violations = tuple(rule.check(codebase))
        if violations:
            logger.warning("Rule %s failed with %d violation(s)", rule.name, len(violations))
        results.append(RuleResult(rule=rule.name, description=rule.description, violations=violations))

    report = ConformanceReport(package=codebase.package, results=tuple(results))
    logger.info(
        "Checked %d rules against %d modules of %s: %d violation(s)",
        len(results),
        len(codebase.modules),
        codebase.package,
        len(report.violations),
    )
    return report


def check_package(
    root: Union[str, Path],
    package: Optional[str] = None,
    rules: Optional[Sequence[Rule]] = None,
) -> ConformanceReport:
    """Scan a package directory and check it."""
    return check(scan_package(root, package), rules)
