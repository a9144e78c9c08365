"""Conformance rules. Each rule is an independent pass/fail check over a CodeBase."""

from aiblog.conformance.rules.base import Rule, Violation
from aiblog.conformance.rules.boundaries import ForbiddenDependencyRule
from aiblog.conformance.rules.cycles import SliceCycleRule
from aiblog.conformance.rules.entities import (
    EntityCascadeRule,
    EntityMutatorRule,
    EntityRelationshipShapeRule,
    ManyToOneLazyRule,
    RelationshipKind,
)
from aiblog.conformance.rules.layers import Layer, LayeredArchitectureRule
from aiblog.conformance.rules.placement import ClassPlacementRule

__all__ = [
    "ClassPlacementRule",
    "EntityCascadeRule",
    "EntityMutatorRule",
    "EntityRelationshipShapeRule",
    "ForbiddenDependencyRule",
    "Layer",
    "LayeredArchitectureRule",
    "ManyToOneLazyRule",
    "RelationshipKind",
    "Rule",
    "SliceCycleRule",
    "Violation",
]
