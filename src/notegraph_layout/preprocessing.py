"""
Graph preprocessing utilities.

This module provides the graph algorithms the layouts are built on:
- Cycle detection and removal
- Topological sorting
- Rank (layer) assignment
- Crossing minimization between ranks
- Breadth-first levels and node degrees

All functions work on node indices ``0..n-1`` and edges given as
``(source, target)`` index pairs. Out-of-range indices are skipped.
"""

from __future__ import annotations

from collections import deque
from typing import Optional, Sequence

IndexEdge = tuple[int, int]


def _out_adjacency(n: int, edges: Sequence[IndexEdge]) -> list[list[int]]:
    adj: list[list[int]] = [[] for _ in range(n)]
    for src, tgt in edges:
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append(tgt)
    return adj


# =============================================================================
# Cycle Detection and Removal
# =============================================================================


def detect_cycle(n: int, edges: Sequence[IndexEdge]) -> Optional[list[int]]:
    """
    Detect if a directed graph contains a cycle.

    Uses an iterative DFS so deep chains do not hit the recursion limit.

    Args:
        n: Number of nodes
        edges: Directed edges as (source, target) pairs

    Returns:
        List of node indices forming a cycle (first node repeated at the
        end), or None if acyclic.

    Example:
        >>> detect_cycle(3, [(0, 1), (1, 2), (2, 0)])
        [0, 1, 2, 0]
    """
    adj = _out_adjacency(n, edges)
    # DFS states: 0=unvisited, 1=on stack, 2=done
    state = [0] * n

    for start in range(n):
        if state[start]:
            continue
        path: list[int] = [start]
        stack: list[tuple[int, int]] = [(start, 0)]
        state[start] = 1
        while stack:
            node, next_child = stack[-1]
            if next_child < len(adj[node]):
                stack[-1] = (node, next_child + 1)
                child = adj[node][next_child]
                if state[child] == 1:
                    return path[path.index(child) :] + [child]
                if state[child] == 0:
                    state[child] = 1
                    path.append(child)
                    stack.append((child, 0))
            else:
                state[node] = 2
                path.pop()
                stack.pop()

    return None


def has_cycle(n: int, edges: Sequence[IndexEdge]) -> bool:
    """Check if a directed graph contains any cycle (self-loops included)."""
    return detect_cycle(n, edges) is not None


def remove_cycles(n: int, edges: Sequence[IndexEdge]) -> tuple[list[IndexEdge], set[int]]:
    """
    Make a directed graph acyclic by reversing DFS back edges.

    This is the greedy feedback arc set approximation dagre's "dfs" acyclic
    step uses. Self-loops cannot be fixed by reversal and should be removed
    beforehand.

    Args:
        n: Number of nodes
        edges: Directed edges as (source, target) pairs

    Returns:
        Tuple of (new_edges, reversed_indices) where:
        - new_edges: Same edges in the same order, back edges reversed
        - reversed_indices: Positions in edges that were reversed

    Example:
        >>> new_edges, flipped = remove_cycles(2, [(0, 1), (1, 0)])
        >>> new_edges, flipped
        ([(0, 1), (0, 1)], {1})
    """
    adj: list[list[tuple[int, int]]] = [[] for _ in range(n)]  # (neighbor, edge_index)
    for i, (src, tgt) in enumerate(edges):
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append((tgt, i))

    state = [0] * n
    reversed_indices: set[int] = set()

    for start in range(n):
        if state[start]:
            continue
        state[start] = 1
        stack: list[tuple[int, int]] = [(start, 0)]
        while stack:
            node, next_child = stack[-1]
            if next_child < len(adj[node]):
                stack[-1] = (node, next_child + 1)
                child, edge_idx = adj[node][next_child]
                if state[child] == 1:
                    reversed_indices.add(edge_idx)
                elif state[child] == 0:
                    state[child] = 1
                    stack.append((child, 0))
            else:
                state[node] = 2
                stack.pop()

    new_edges = [
        (tgt, src) if i in reversed_indices else (src, tgt) for i, (src, tgt) in enumerate(edges)
    ]
    return new_edges, reversed_indices


# =============================================================================
# Topological Sort
# =============================================================================


def topological_sort(n: int, edges: Sequence[IndexEdge]) -> Optional[list[int]]:
    """
    Compute a topological ordering of nodes in a directed acyclic graph.

    Uses Kahn's algorithm (BFS-based). Ties are broken by node index, so the
    result is deterministic.

    Args:
        n: Number of nodes
        edges: Directed edges as (source, target) pairs

    Returns:
        List of node indices in topological order, or None if graph has cycles.

    Example:
        >>> topological_sort(3, [(0, 1), (1, 2)])
        [0, 1, 2]
    """
    adj = _out_adjacency(n, edges)
    in_degree = [0] * n
    for neighbors in adj:
        for tgt in neighbors:
            in_degree[tgt] += 1

    queue: deque[int] = deque(i for i in range(n) if in_degree[i] == 0)
    result: list[int] = []

    while queue:
        node = queue.popleft()
        result.append(node)
        for neighbor in adj[node]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    if len(result) != n:
        return None
    return result


# =============================================================================
# Rank Assignment
# =============================================================================


def assign_ranks_longest_path(n: int, edges: Sequence[IndexEdge]) -> list[int]:
    """
    Assign each node a rank using the longest path from any source.

    Every edge (u, v) ends up with rank[v] >= rank[u] + 1. Sources and
    isolated nodes get rank 0.

    Args:
        n: Number of nodes
        edges: Directed acyclic edges as (source, target) pairs

    Returns:
        Rank per node index.

    Raises:
        ValueError: If the graph contains a cycle (call remove_cycles() first)

    Example:
        >>> assign_ranks_longest_path(4, [(0, 1), (0, 2), (1, 3)])
        [0, 1, 1, 2]
    """
    order = topological_sort(n, edges)
    if order is None:
        raise ValueError("Cannot rank a cyclic graph; call remove_cycles() first")

    adj = _out_adjacency(n, edges)
    ranks = [0] * n
    for node in order:
        for child in adj[node]:
            if ranks[node] + 1 > ranks[child]:
                ranks[child] = ranks[node] + 1
    return ranks


def group_by_rank(ranks: Sequence[int]) -> list[list[int]]:
    """
    Group node indices into layers by rank, preserving index order.

    Example:
        >>> group_by_rank([0, 1, 1, 2])
        [[0], [1, 2], [3]]
    """
    if not ranks:
        return []
    layers: list[list[int]] = [[] for _ in range(max(ranks) + 1)]
    for node, rank in enumerate(ranks):
        layers[rank].append(node)
    return layers


# =============================================================================
# Crossing Minimization
# =============================================================================


def minimize_crossings_barycenter(
    layers: list[list[int]],
    edges: Sequence[IndexEdge],
    iterations: int = 24,
) -> list[list[int]]:
    """
    Minimize edge crossings between layers using the barycenter heuristic.

    Repeatedly sweeps through layers, reordering nodes based on the
    average position of their neighbors in the adjacent layer. Sorting is
    stable, so the result is deterministic. The ordering with the fewest
    crossings seen across sweeps is returned.

    Args:
        layers: Layers of node indices, e.g. from group_by_rank()
        edges: Directed edges between consecutive layers
        iterations: Number of sweep iterations

    Returns:
        Reordered layers.

    Example:
        >>> minimize_crossings_barycenter([[0, 1], [2, 3]], [(0, 3), (1, 2)])
        [[0, 1], [3, 2]]
    """
    result = [list(layer) for layer in layers]
    if len(result) < 2:
        return result

    position: dict[int, int] = {}
    for layer in result:
        for pos, node in enumerate(layer):
            position[node] = pos

    outgoing: dict[int, list[int]] = {node: [] for node in position}
    incoming: dict[int, list[int]] = {node: [] for node in position}
    for src, tgt in edges:
        if src in position and tgt in position:
            outgoing[src].append(tgt)
            incoming[tgt].append(src)

    def order_layer(layer_idx: int, adj: dict[int, list[int]]) -> None:
        barycenters: list[tuple[float, int]] = []
        for node in result[layer_idx]:
            neighbors = adj[node]
            if neighbors:
                avg = sum(position[nb] for nb in neighbors) / len(neighbors)
            else:
                # Keep current position
                avg = float(position[node])
            barycenters.append((avg, node))

        barycenters.sort(key=lambda item: item[0])
        result[layer_idx] = [node for _, node in barycenters]
        for pos, (_, node) in enumerate(barycenters):
            position[node] = pos

    best = [list(layer) for layer in result]
    best_crossings = count_crossings(result, edges)

    for i in range(iterations):
        if best_crossings == 0:
            break
        if i % 2 == 0:
            # Sweep down
            for layer_idx in range(1, len(result)):
                order_layer(layer_idx, incoming)
        else:
            # Sweep up
            for layer_idx in range(len(result) - 2, -1, -1):
                order_layer(layer_idx, outgoing)

        crossings = count_crossings(result, edges)
        if crossings < best_crossings:
            best_crossings = crossings
            best = [list(layer) for layer in result]

    return best


def count_crossings(layers: Sequence[Sequence[int]], edges: Sequence[IndexEdge]) -> int:
    """
    Count the number of edge crossings in a layered drawing.

    Only edges between nodes present in layers are counted.

    Args:
        layers: Layers, each an ordered list of node indices
        edges: Edges as (source, target) pairs

    Returns:
        Number of edge crossings.
    """
    node_layer: dict[int, int] = {}
    node_pos: dict[int, int] = {}
    for layer_idx, layer in enumerate(layers):
        for pos, node in enumerate(layer):
            node_layer[node] = layer_idx
            node_pos[node] = pos

    layer_edges: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for src, tgt in edges:
        if src not in node_layer or tgt not in node_layer:
            continue
        l1, l2 = node_layer[src], node_layer[tgt]
        if l1 > l2:
            l1, l2 = l2, l1
            src, tgt = tgt, src
        layer_edges.setdefault((l1, l2), []).append((node_pos[src], node_pos[tgt]))

    total = 0
    for pair_edges in layer_edges.values():
        for i, (s1, t1) in enumerate(pair_edges):
            for s2, t2 in pair_edges[i + 1 :]:
                if (s1 < s2 and t1 > t2) or (s1 > s2 and t1 < t2):
                    total += 1
    return total


# =============================================================================
# Breadth-First Levels and Degrees
# =============================================================================


def bfs_levels(adjacency: Sequence[Sequence[int]], start: int) -> dict[int, int]:
    """
    Breadth-first depth of every node reachable from start.

    Args:
        adjacency: Neighbor lists per node index
        start: Index of the start node

    Returns:
        Mapping of node index to depth, in visit order (start first).

    Example:
        >>> bfs_levels([[1], [0, 2], [1], []], 0)
        {0: 0, 1: 1, 2: 2}
    """
    levels: dict[int, int] = {start: 0}
    queue: deque[int] = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency[current]:
            if neighbor not in levels:
                levels[neighbor] = levels[current] + 1
                queue.append(neighbor)
    return levels


def max_degree_node(adjacency: Sequence[Sequence[int]]) -> int:
    """
    Index of the node with the most neighbors.

    Ties go to the lowest index. Returns -1 for an empty graph.
    """
    best, best_degree = -1, -1
    for node, neighbors in enumerate(adjacency):
        if len(neighbors) > best_degree:
            best, best_degree = node, len(neighbors)
    return best


__all__ = [
    "IndexEdge",
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "topological_sort",
    "assign_ranks_longest_path",
    "group_by_rank",
    "minimize_crossings_barycenter",
    "count_crossings",
    "bfs_levels",
    "max_degree_node",
]
