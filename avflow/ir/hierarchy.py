"""Area hierarchy resolution.

Areas arrive as a flat list with ``parentId`` back-references. They are
resolved here into an explicit forest: an arena of areas kept in input
order, an id -> index map and per-area child index lists. The resolved
order places every area after its parent, so compound declarations can be
emitted before their children.
"""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from avflow.errors import ErrorKind, GraphError, GraphValidationError
from avflow.models.graph import Area
from avflow.tools.reference_checker import duplicate_id_errors


@dataclass(frozen=True)
class AreaForest:
    areas: Tuple[Area, ...]
    index: Dict[str, int]
    children: Tuple[Tuple[int, ...], ...]
    roots: Tuple[int, ...]
    order: Tuple[int, ...]

    def ordered_areas(self) -> List[Area]:
        return [self.areas[i] for i in self.order]

    def children_of(self, area_id: str) -> List[Area]:
        return [self.areas[i] for i in self.children[self.index[area_id]]]

    def parent_of(self, area_id: str) -> Optional[Area]:
        parent_id = self.areas[self.index[area_id]].parent_id
        return None if parent_id is None else self.areas[self.index[parent_id]]

    def ancestors(self, area_id: str) -> List[str]:
        """Ids from the direct parent up to the root."""
        chain: List[str] = []
        parent = self.parent_of(area_id)
        while parent is not None:
            chain.append(parent.id)
            parent = self.parent_of(parent.id)
        return chain

    def depth(self, area_id: str) -> int:
        return len(self.ancestors(area_id))


@dataclass(frozen=True)
class HierarchyResult:
    forest: Optional[AreaForest] = None
    errors: Tuple[GraphError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> AreaForest:
        if self.errors or self.forest is None:
            raise GraphValidationError(self.errors)
        return self.forest


def _cycle_errors(areas: Sequence[Area], index: Dict[str, int], unplaced: List[int]) -> List[GraphError]:
    # 0 = unvisited, 1 = on the current walk, 2 = finished
    state = [0] * len(areas)
    cycles: List[List[int]] = []
    for start in unplaced:
        walk: List[int] = []
        current: Optional[int] = start
        while current is not None and state[current] == 0:
            state[current] = 1
            walk.append(current)
            parent_id = areas[current].parent_id
            current = index.get(parent_id) if parent_id is not None else None
        if current is not None and state[current] == 1:
            cycles.append(walk[walk.index(current):])
        for i in walk:
            state[i] = 2

    errors: List[GraphError] = []
    for members in sorted(cycles, key=min):
        first = min(members)
        loop = [areas[first].id]
        current = index[areas[first].parent_id]
        while current != first:
            loop.append(areas[current].id)
            current = index[areas[current].parent_id]
        loop.append(areas[first].id)
        errors.append(
            GraphError(
                kind=ErrorKind.CYCLIC_AREA_HIERARCHY,
                locator=areas[first].id,
                message=f"Area hierarchy contains a cycle: {' -> '.join(loop)}",
                reference=areas[first].parent_id,
            )
        )
    return errors


def resolve_hierarchy(areas: Sequence[Area]) -> HierarchyResult:
    """Order areas parent-first and reject dangling or cyclic parent links."""
    areas = tuple(areas)
    errors: List[GraphError] = duplicate_id_errors((a.id for a in areas), "area")

    index: Dict[str, int] = {}
    for i, area in enumerate(areas):
        index.setdefault(area.id, i)

    children: List[List[int]] = [[] for _ in areas]
    roots: List[int] = []
    for i, area in enumerate(areas):
        if area.parent_id is None:
            roots.append(i)
        elif area.parent_id in index:
            children[index[area.parent_id]].append(i)
        else:
            errors.append(
                GraphError(
                    kind=ErrorKind.UNRESOLVED_AREA_REFERENCE,
                    locator=area.id,
                    message=f"Area '{area.id}' references parent area '{area.parent_id}' which does not exist in graph",
                    reference=area.parent_id,
                )
            )

    # Lowest input index first among every area whose parent is already placed.
    ready = list(roots)
    heapq.heapify(ready)
    order: List[int] = []
    while ready:
        i = heapq.heappop(ready)
        order.append(i)
        for child in children[i]:
            heapq.heappush(ready, child)

    placed = set(order)
    unplaced = [i for i in range(len(areas)) if i not in placed]
    if unplaced:
        errors.extend(_cycle_errors(areas, index, unplaced))

    if errors:
        return HierarchyResult(errors=tuple(errors))

    forest = AreaForest(
        areas=areas,
        index=index,
        children=tuple(tuple(c) for c in children),
        roots=tuple(roots),
        order=tuple(order),
    )
    return HierarchyResult(forest=forest)
