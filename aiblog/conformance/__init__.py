"""
Structural conformance checker.

Build-time static verification of the package's module graph:
layer dependency direction, class placement, cycle freedom between
domains, persisted-entity shape and the AI hexagonal boundary.
Runs from the test suite (tests/test_architecture.py) or as
``python -m aiblog.conformance``. Never runs in the request path.
"""

from aiblog.conformance.checker import ConformanceReport, RuleResult, check, check_package
from aiblog.conformance.codebase import CodeBase, ScanError, scan_package
from aiblog.conformance.policy import default_rules
from aiblog.conformance.rules import Rule, Violation

__all__ = [
    "CodeBase",
    "ConformanceReport",
    "Rule",
    "RuleResult",
    "ScanError",
    "Violation",
    "check",
    "check_package",
    "default_rules",
    "scan_package",
]
