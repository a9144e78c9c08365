"""
Default conformance policy for the aiblog package layout.

    aiblog.domain.<name>.controller   request handling (FastAPI routers)
    aiblog.domain.<name>.service      domain logic
    aiblog.domain.<name>.repository   data access
    aiblog.domain.<name>.entity       persisted entities
    aiblog.domain.ai.port             AI capability abstractions
    aiblog.domain.ai.adapter          concrete AI provider integrations
"""

from aiblog.conformance.rules import (
    ClassPlacementRule,
    EntityCascadeRule,
    EntityMutatorRule,
    EntityRelationshipShapeRule,
    ForbiddenDependencyRule,
    Layer,
    LayeredArchitectureRule,
    ManyToOneLazyRule,
    Rule,
    SliceCycleRule,
)

CONTROLLER = Layer("Controller", "..controller..", accessible_by=())
SERVICE = Layer("Service", "..service..")
REPOSITORY = Layer("Repository", "..repository..", accessible_by=("Service",))


def default_rules(package: str = "aiblog", entity_bases: tuple[str, ...] = ("Base",)) -> list[Rule]:
    """Return the full rule set for a package laid out like aiblog.

    Args:
        package: Import name of the root package.
        entity_bases: Declarative base class names marking persisted entities.
    """
    domain = f"{package}.domain.."
    return [
        LayeredArchitectureRule([CONTROLLER, SERVICE, REPOSITORY]),
        ClassPlacementRule("Controller", domain, "..controller.."),
        ClassPlacementRule("Service", domain, "..service..", include_abstract=False),
        ClassPlacementRule("Repository", domain, "..repository.."),
        SliceCycleRule(f"{package}.domain.(*).."),
        EntityMutatorRule(entity_bases),
        EntityRelationshipShapeRule(entity_bases),
        EntityCascadeRule(entity_bases),
        ManyToOneLazyRule(entity_bases),
        ForbiddenDependencyRule(
            "ai-service-adapter",
            "..ai.service..",
            "..ai.adapter..",
            reason="go through the port abstraction",
        ),
        ForbiddenDependencyRule(
            "ai-port-adapter",
            "..ai.port..",
            "..ai.adapter..",
            reason="ports must not know their implementations",
        ),
    ]
