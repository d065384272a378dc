"""
Deterministic 2-D placement.

Two families share the same grid arithmetic:
- Open Exchange views (layered and filtered grids) placed on an absolute canvas
- draw.io swimlanes, one lane per layer, nodes placed relative to their lane

Nothing here sorts by name: placement follows extraction order.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence, Set, Tuple

from archexport.ir.model import (
    LAYER_ORDER,
    Element,
    Layer,
    Relationship,
    View,
    ViewConnection,
    ViewNode,
)
from archexport.migration.classifier import (
    Classification,
    ClassifiedElement,
    ClassifiedRelationship,
    MigrationStatus,
)

GRID_COLUMNS = 5

# Open Exchange views
VIEW_MARGIN = 40
SPACING_X = 200
SPACING_Y = 120
LAYER_GAP = 40
GRID_ROW_GAP = 20
VIEW_NODE_WIDTH = 160
VIEW_NODE_HEIGHT = 80

# draw.io swimlanes
NODE_WIDTH = 200
NODE_HEIGHT = 60
HORIZONTAL_GAP = 40
VERTICAL_GAP = 30
LAYER_PADDING = 20
LAYER_HEADER_HEIGHT = 30
SWIMLANE_X = 20
SWIMLANE_INITIAL_Y = 20
MIN_CANVAS_WIDTH = 600
CANVAS_MARGIN = 40


def grid_dimensions(count: int, max_columns: int = GRID_COLUMNS) -> Tuple[int, int]:
    """(columns, rows) for *count* cells filled row by row."""
    if count <= 0:
        return 0, 0
    columns = max(1, min(max_columns, count))
    return columns, math.ceil(count / columns)


def connections_for(
    element_ids: Set[str],
    relationships: Iterable[Relationship],
) -> Tuple[ViewConnection, ...]:
    """Connections whose two endpoints are both on the view."""
    return tuple(
        ViewConnection(relationship_ref=rel.id, source_ref=rel.source, target_ref=rel.target)
        for rel in relationships
        if rel.source in element_ids and rel.target in element_ids
    )


# ============================================================
# Open Exchange views
# ============================================================

def layered_view(
    view_id: str,
    name: str,
    elements: Sequence[Element],
    relationships: Sequence[Relationship],
) -> View:
    nodes: List[ViewNode] = []
    y = VIEW_MARGIN

    for layer in LAYER_ORDER:
        layer_elements = [el for el in elements if el.layer is layer]
        x = VIEW_MARGIN
        for el in layer_elements:
            nodes.append(ViewNode(el.id, x, y, VIEW_NODE_WIDTH, VIEW_NODE_HEIGHT))
            x += SPACING_X
        if layer_elements:
            y += SPACING_Y + LAYER_GAP

    ids = {node.element_ref for node in nodes}
    return View(
        id=view_id,
        name=name,
        viewpoint="Layered",
        nodes=tuple(nodes),
        connections=connections_for(ids, relationships),
    )


def grid_view(
    view_id: str,
    name: str,
    elements: Sequence[Element],
    relationships: Sequence[Relationship],
) -> View:
    nodes = tuple(
        ViewNode(
            el.id,
            VIEW_MARGIN + (i % GRID_COLUMNS) * SPACING_X,
            VIEW_MARGIN + (i // GRID_COLUMNS) * (SPACING_Y + GRID_ROW_GAP),
            VIEW_NODE_WIDTH,
            VIEW_NODE_HEIGHT,
        )
        for i, el in enumerate(elements)
    )
    ids = {node.element_ref for node in nodes}
    return View(
        id=view_id,
        name=name,
        nodes=nodes,
        connections=connections_for(ids, relationships),
    )


# (id, name, layers) for the single-concern grid views
FILTERED_VIEWS = [
    ("view-biz-motiv", "Business & Motivation", {Layer.BUSINESS, Layer.MOTIVATION, Layer.STRATEGY}),
    ("view-app", "Application Layer", {Layer.APPLICATION}),
    ("view-tech", "Technology Layer", {Layer.TECHNOLOGY}),
    ("view-impl", "Implementation & Migration", {Layer.IMPLEMENTATION}),
]


def generate_views(
    elements: Sequence[Element],
    relationships: Sequence[Relationship],
) -> Tuple[View, ...]:
    """Full layered view followed by the per-layer grids; empty views are dropped."""
    views = [layered_view("view-full", "Full Layered View", elements, relationships)]

    for view_id, name, layers in FILTERED_VIEWS:
        subset = [el for el in elements if el.layer in layers]
        views.append(grid_view(view_id, name, subset, relationships))

    return tuple(view for view in views if view.nodes)


# ============================================================
# draw.io swimlanes
# ============================================================

class LayoutMode(Enum):
    AS_IS = "as-is"
    TARGET = "target"
    MIGRATION = "migration"


PAGE_NAMES = {
    LayoutMode.AS_IS: "As-Is Architecture",
    LayoutMode.TARGET: "Target Architecture",
    LayoutMode.MIGRATION: "Migration Architecture",
}


def visible_in(mode: LayoutMode, status: MigrationStatus) -> bool:
    if mode is LayoutMode.AS_IS:
        return status is not MigrationStatus.ADD
    if mode is LayoutMode.TARGET:
        return status is not MigrationStatus.REMOVE
    return True


@dataclass
class PlacedNode:
    item: ClassifiedElement
    x: int  # relative to the lane
    y: int


@dataclass
class Swimlane:
    layer: Layer
    x: int
    y: int
    width: int
    height: int
    columns: int
    rows: int
    nodes: List[PlacedNode] = field(default_factory=list)


@dataclass
class SwimlaneLayout:
    mode: LayoutMode
    lanes: List[Swimlane]
    edges: List[ClassifiedRelationship]
    width: int
    height: int

    @property
    def nodes(self) -> List[PlacedNode]:
        return [node for lane in self.lanes for node in lane.nodes]


def swimlane_layout(classification: Classification, mode: LayoutMode) -> SwimlaneLayout:
    # Filter first: hidden elements never take a grid slot
    visible = [item for item in classification.elements if visible_in(mode, item.status)]
    visible_ids = {item.id for item in visible}

    lanes: List[Swimlane] = []
    y = SWIMLANE_INITIAL_Y
    max_width = MIN_CANVAS_WIDTH

    for layer in LAYER_ORDER:
        members = [item for item in visible if item.layer is layer]
        if not members:
            continue

        columns, rows = grid_dimensions(len(members))
        width = columns * (NODE_WIDTH + HORIZONTAL_GAP) + LAYER_PADDING * 2
        height = rows * (NODE_HEIGHT + VERTICAL_GAP) + LAYER_HEADER_HEIGHT + LAYER_PADDING * 2
        max_width = max(max_width, width + CANVAS_MARGIN)

        lane = Swimlane(layer=layer, x=SWIMLANE_X, y=y, width=width, height=height,
                        columns=columns, rows=rows)
        for idx, item in enumerate(members):
            col, row = idx % columns, idx // columns
            lane.nodes.append(PlacedNode(
                item=item,
                x=LAYER_PADDING + col * (NODE_WIDTH + HORIZONTAL_GAP),
                y=LAYER_HEADER_HEIGHT + LAYER_PADDING + row * (NODE_HEIGHT + VERTICAL_GAP),
            ))
        lanes.append(lane)

        y += height + VERTICAL_GAP

    edges = [
        rel for rel in classification.relationships
        if rel.relationship.source in visible_ids and rel.relationship.target in visible_ids
    ]

    return SwimlaneLayout(
        mode=mode,
        lanes=lanes,
        edges=edges,
        width=max_width + CANVAS_MARGIN,
        height=y + CANVAS_MARGIN,
    )
