"""
Cycle freedom between slices.

Modules are grouped into slices by the ``(*)`` capture of a package
identifier (``aiblog.domain.(*)..`` groups by domain name). The slice
graph must be acyclic. Strongly connected components are found with
Tarjan's algorithm and one violation is reported per component.
"""

from collections import defaultdict

from aiblog.conformance.codebase import CodeBase, Dependency
from aiblog.conformance.patterns import PackageMatcher
from aiblog.conformance.rules.base import Rule, Violation


class SliceCycleRule(Rule):
    """Slices selected by ``identifier`` must be free of cycles."""

    name = "slice-cycles"

    def __init__(self, identifier: str) -> None:
        if "(*)" not in identifier:
            raise ValueError(f"Slice identifier needs a (*) capture: {identifier!r}")
        self.matcher = PackageMatcher(identifier)
        self.description = f"Slices {identifier} are free of cycles"

    def slice_graph(self, codebase: CodeBase) -> dict[str, dict[str, list[Dependency]]]:
        """Return ``{slice: {depended-on slice: [module dependencies]}}``."""
        graph: dict[str, dict[str, list[Dependency]]] = defaultdict(lambda: defaultdict(list))
        for module in codebase.modules:
            name = self.matcher.capture(module)
            if name is not None:
                graph.setdefault(name, defaultdict(list))
        for dependency in codebase.dependencies():
            origin = self.matcher.capture(dependency.origin)
            target = self.matcher.capture(dependency.target)
            if origin is None or target is None or origin == target:
                continue
            graph[origin][target].append(dependency)
        return graph

    def check(self, codebase: CodeBase) -> list[Violation]:
        graph = self.slice_graph(codebase)
        violations = []
        for component in _strongly_connected_components(graph):
            if len(component) < 2:
                continue
            path = _cycle_path(graph, component)
            edges = []
            for origin, target in zip(path, path[1:]):
                for dependency in graph[origin][target]:
                    edges.append(f"    {dependency.describe()}")
            message = "Cycle between slices: " + " -> ".join(path)
            if edges:
                message += "\n" + "\n".join(edges)
            violations.append(self.violation(path[0], message))
        return violations


def _strongly_connected_components(graph: dict[str, dict[str, list[Dependency]]]) -> list[list[str]]:
    index_counter = [0]
    stack: list[str] = []
    lowlinks: dict[str, int] = {}
    index: dict[str, int] = {}
    on_stack: dict[str, bool] = {}
    components = []

    def strongconnect(node: str) -> None:
        index[node] = index_counter[0]
        lowlinks[node] = index_counter[0]
        index_counter[0] += 1
        stack.append(node)
        on_stack[node] = True

        for successor in sorted(graph.get(node, {})):
            if successor not in index:
                strongconnect(successor)
                lowlinks[node] = min(lowlinks[node], lowlinks[successor])
            elif on_stack.get(successor):
                lowlinks[node] = min(lowlinks[node], index[successor])

        if lowlinks[node] == index[node]:
            component = []
            while True:
                member = stack.pop()
                on_stack[member] = False
                component.append(member)
                if member == node:
                    break
            components.append(sorted(component))

    for node in sorted(graph):
        if node not in index:
            strongconnect(node)

    return sorted(components)


def _cycle_path(graph: dict[str, dict[str, list[Dependency]]], component: list[str]) -> list[str]:
    """Shortest cycle through the first member of a strongly connected component."""
    members = set(component)
    start = component[0]
    previous: dict[str, str] = {}
    frontier = [start]
    while frontier:
        next_frontier = []
        for node in frontier:
            for successor in sorted(graph.get(node, {})):
                if successor not in members:
                    continue
                if successor == start:
                    path = [node]
                    while path[-1] != start:
                        path.append(previous[path[-1]])
                    return [start, *reversed(path[:-1]), start] if len(path) > 1 else [start, start]
                if successor not in previous:
                    previous[successor] = node
                    next_frontier.append(successor)
        frontier = next_frontier
    return [*component, start]
