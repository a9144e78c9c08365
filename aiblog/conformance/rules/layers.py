"""
Layer dependency direction.

Each layer is a set of modules selected by a package identifier. Only
dependencies whose origin and target both belong to a layer are
considered; layers with no modules are allowed.
"""

from dataclasses import dataclass, field
from typing import Optional

from aiblog.conformance.codebase import CodeBase
from aiblog.conformance.patterns import PackageMatcher
from aiblog.conformance.rules.base import Rule, Violation


@dataclass(frozen=True)
class Layer:
    """A named architectural layer.

    Attributes:
        name: Display name, e.g. ``"Service"``.
        identifier: Package identifier selecting the layer's modules.
        accessible_by: Layers allowed to depend on this one. ``None`` means
            unrestricted; an empty tuple means no other layer may.
    """

    name: str
    identifier: str
    accessible_by: Optional[tuple[str, ...]] = None
    matcher: PackageMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "matcher", PackageMatcher(self.identifier))

    def contains(self, module: str) -> bool:
        return self.matcher.matches(module)


class LayeredArchitectureRule(Rule):
    """Checks that every cross-layer dependency is allowed by the target layer."""

    name = "layer-dependencies"

    def __init__(self, layers: list[Layer]) -> None:
        names = [layer.name for layer in layers]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate layer names: {names}")
        for layer in layers:
            unknown = set(layer.accessible_by or ()) - set(names)
            if unknown:
                raise ValueError(f"Layer {layer.name} references unknown layers: {sorted(unknown)}")
        self.layers = list(layers)
        self.description = "Layer dependencies follow " + ", ".join(
            f"{layer.name}({layer.identifier})" for layer in self.layers
        )

    def layers_of(self, module: str) -> list[Layer]:
        return [layer for layer in self.layers if layer.contains(module)]

    def check(self, codebase: CodeBase) -> list[Violation]:
        violations = []
        for dependency in codebase.dependencies():
            origin_layers = self.layers_of(dependency.origin)
            target_layers = self.layers_of(dependency.target)
            if not origin_layers or not target_layers:
                continue

            for target_layer in target_layers:
                if target_layer.accessible_by is None:
                    continue
                if target_layer in origin_layers:
                    continue
                if any(origin.name in target_layer.accessible_by for origin in origin_layers):
                    continue
                origin_names = "/".join(layer.name for layer in origin_layers)
                if target_layer.accessible_by:
                    allowed = "only by " + ", ".join(target_layer.accessible_by)
                else:
                    allowed = "by no other layer"
                violations.append(
                    self.violation(
                        dependency.origin,
                        f"{dependency.origin} in layer '{origin_names}' depends on "
                        f"{dependency.target} in layer '{target_layer.name}', "
                        f"which may be accessed {allowed}",
                        dependency.line,
                    )
                )
        return violations
