"""Graph algorithms: strongly connected components, cycles, transitive closures."""

from collections import deque
from typing import Iterable, Mapping, Union

from .models import DependencyGraph

Cycle = tuple[str, ...]
Edges = Mapping[str, Iterable[str]]


def _edges_of(graph: Union[DependencyGraph, Edges]) -> Edges:
    return graph.edges if isinstance(graph, DependencyGraph) else graph


def tarjan_scc(adjacency: Edges, all_nodes: set[str]) -> list[set[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains. Nodes are visited in sorted order so the result is
    deterministic.
    """
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[set[str]] = []

    def neighbors_of(node: str) -> list[str]:
        return sorted(w for w in adjacency.get(node, ()) if w in all_nodes)

    for root in sorted(all_nodes):
        if root in index:
            continue

        # Explicit call stack: each frame is (node, neighbor_iterator)
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        call_stack: list[tuple] = [(root, iter(neighbors_of(root)))]

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    # "Recurse" into w
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    call_stack.append((w, iter(neighbors_of(w))))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                # All neighbors processed: "return" from v
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: set[str] = set()
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.add(w)
                        if w == v:
                            break
                    result.append(component)

    return result


def _cycles_from(start: str, adjacency: Edges, component: set[str]) -> Iterable[Cycle]:
    """Yield every simple cycle whose smallest node is ``start``.

    Only nodes of ``start``'s component greater than ``start`` may appear on
    the path, so each cycle is produced once, already rotated to begin at
    its smallest member.
    """
    allowed = {node for node in component if node > start}
    path = [start]
    on_path = {start}
    stack = [iter(sorted(adjacency.get(start, ())))]

    while stack:
        for nxt in stack[-1]:
            if nxt == start:
                if len(path) > 1:
                    yield tuple(path)
            elif nxt in allowed and nxt not in on_path:
                path.append(nxt)
                on_path.add(nxt)
                stack.append(iter(sorted(adjacency.get(nxt, ()))))
                break
        else:
            stack.pop()
            on_path.discard(path.pop())


def normalize_cycle(path: Iterable[str]) -> Cycle:
    """Rotate a cycle to start at its smallest node, dropping a closing repeat.

    >>> normalize_cycle(["c", "a", "b", "c"])
    ('a', 'b', 'c')
    """
    nodes = list(path)
    if len(nodes) > 1 and nodes[0] == nodes[-1]:
        nodes = nodes[:-1]
    if not nodes:
        return ()
    idx = nodes.index(min(nodes))
    return tuple(nodes[idx:] + nodes[:idx])


def find_all_cycles(graph: Union[DependencyGraph, Edges]) -> list[Cycle]:
    """Find every elementary cycle in the graph.

    Each cycle is reported once, starting at its lexicographically smallest
    unit, without repeating the start at the end. Cycles are ordered by
    their first unit. Self-loops are not cycles.
    """
    adjacency = _edges_of(graph)
    nodes = set(adjacency)
    for deps in adjacency.values():
        nodes.update(deps)

    cycles: list[Cycle] = []
    seen: set[Cycle] = set()
    for component in tarjan_scc(adjacency, nodes):
        if len(component) < 2:
            continue
        for start in sorted(component):
            for cycle in _cycles_from(start, adjacency, component):
                cycle = normalize_cycle(cycle)
                if cycle not in seen:
                    seen.add(cycle)
                    cycles.append(cycle)

    cycles.sort(key=lambda c: c[0])
    return cycles


def is_acyclic(graph: Union[DependencyGraph, Edges]) -> bool:
    """True if the graph has no cycles."""
    return not find_all_cycles(graph)


def cyclic_units(graph: Union[DependencyGraph, Edges]) -> set[str]:
    """All units that participate in at least one cycle."""
    return {unit for cycle in find_all_cycles(graph) for unit in cycle}


def _reachable(adjacency: Edges, start: str) -> set[str]:
    visited: set[str] = set()
    queue: deque[str] = deque(adjacency.get(start, ()))
    while queue:
        node = queue.popleft()
        if node in visited:
            continue
        visited.add(node)
        queue.extend(n for n in adjacency.get(node, ()) if n not in visited)
    return visited


def transitive_dependencies(graph: DependencyGraph, unit: str) -> set[str]:
    """Every unit reachable from ``unit`` along dependency edges.

    ``unit`` itself is included only when it sits on a cycle.
    """
    return _reachable(graph.edges, unit)


def transitive_dependents(graph: DependencyGraph, unit: str) -> set[str]:
    """Blast radius: every unit affected, directly or not, by a change to ``unit``."""
    return _reachable(graph.reverse_edges, unit)
