"""
Tests for view generation and swimlane placement.
"""

import pytest

from archexport.compiler.layout import (
    LayoutMode,
    generate_views,
    grid_dimensions,
    swimlane_layout,
    visible_in,
)
from archexport.ir.model import Element, ElementType, Layer, Relationship, RelationshipType
from archexport.migration.classifier import (
    Classification,
    ClassifiedElement,
    ClassifiedRelationship,
    MigrationStatus,
)

KEEP, ADD, REMOVE = MigrationStatus.KEEP, MigrationStatus.ADD, MigrationStatus.REMOVE


def _el(n: int, layer: Layer = Layer.APPLICATION) -> Element:
    return Element(id=f"e{n}", type=ElementType.APPLICATION_COMPONENT, name=f"Element {n}", layer=layer)


def _rel(n: int, source: str, target: str) -> Relationship:
    return Relationship(id=f"r{n}", type=RelationshipType.FLOW, source=source, target=target)


def _classification(items, relationships=()):
    return Classification(
        elements=tuple(ClassifiedElement(el, status) for el, status in items),
        relationships=tuple(ClassifiedRelationship(rel, status) for rel, status in relationships),
    )


# =============================================================================
# Grid arithmetic
# =============================================================================

@pytest.mark.parametrize("count, expected", [
    (0, (0, 0)),
    (1, (1, 1)),
    (5, (5, 1)),
    (7, (5, 2)),
    (10, (5, 2)),
    (11, (5, 3)),
])
def test_grid_dimensions(count, expected):
    assert grid_dimensions(count) == expected


# =============================================================================
# Open Exchange views
# =============================================================================

class TestViews:

    def test_layered_positions(self):
        elements = [_el(1, Layer.BUSINESS), _el(2, Layer.BUSINESS), _el(3, Layer.TECHNOLOGY)]
        full = generate_views(elements, [])[0]

        assert full.id == "view-full"
        assert full.viewpoint == "Layered"
        assert [(n.element_ref, n.x, n.y, n.w, n.h) for n in full.nodes] == [
            ("e1", 40, 40, 160, 80),
            ("e2", 240, 40, 160, 80),
            # empty Application layer takes no band
            ("e3", 40, 200, 160, 80),
        ]

    def test_grid_view_wraps_after_five(self):
        elements = [_el(i) for i in range(7)]
        views = {v.id: v for v in generate_views(elements, [])}
        app = views["view-app"]
        assert app.viewpoint is None
        rows = sorted({n.y for n in app.nodes})
        assert rows == [40, 180]
        assert [n.x for n in app.nodes[:5]] == [40, 240, 440, 640, 840]
        assert app.nodes[5].x == 40

    def test_empty_views_are_dropped(self):
        views = generate_views([_el(1, Layer.TECHNOLOGY)], [])
        assert [v.id for v in views] == ["view-full", "view-tech"]

    def test_no_elements_no_views(self):
        assert generate_views([], []) == ()

    def test_motivation_and_strategy_share_a_view(self):
        elements = [_el(1, Layer.MOTIVATION), _el(2, Layer.STRATEGY), _el(3, Layer.BUSINESS)]
        views = {v.id: v for v in generate_views(elements, [])}
        assert [n.element_ref for n in views["view-biz-motiv"].nodes] == ["e1", "e2", "e3"]

    def test_connections_need_both_endpoints_on_view(self):
        elements = [_el(1, Layer.APPLICATION), _el(2, Layer.APPLICATION), _el(3, Layer.TECHNOLOGY)]
        relationships = [_rel(1, "e1", "e2"), _rel(2, "e3", "e1"), _rel(3, "e1", "missing")]
        views = {v.id: v for v in generate_views(elements, relationships)}

        assert [c.relationship_ref for c in views["view-full"].connections] == ["r1", "r2"]
        assert [c.relationship_ref for c in views["view-app"].connections] == ["r1"]
        assert views["view-tech"].connections == ()


# =============================================================================
# Swimlanes
# =============================================================================

class TestSwimlanes:

    @pytest.mark.parametrize("mode, status, visible", [
        (LayoutMode.AS_IS, KEEP, True),
        (LayoutMode.AS_IS, ADD, False),
        (LayoutMode.AS_IS, REMOVE, True),
        (LayoutMode.TARGET, KEEP, True),
        (LayoutMode.TARGET, ADD, True),
        (LayoutMode.TARGET, REMOVE, False),
        (LayoutMode.MIGRATION, KEEP, True),
        (LayoutMode.MIGRATION, ADD, True),
        (LayoutMode.MIGRATION, REMOVE, True),
    ])
    def test_visibility(self, mode, status, visible):
        assert visible_in(mode, status) is visible

    def test_seven_elements_make_two_rows(self):
        classification = _classification([(_el(i), KEEP) for i in range(7)])
        layout = swimlane_layout(classification, LayoutMode.MIGRATION)

        (lane,) = layout.lanes
        assert (lane.columns, lane.rows) == (5, 2)
        assert (lane.x, lane.y) == (20, 20)
        assert lane.width == 5 * 240 + 40
        assert lane.height == 2 * 90 + 30 + 40
        assert [(n.x, n.y) for n in lane.nodes[:2]] == [(20, 50), (260, 50)]
        assert (lane.nodes[5].x, lane.nodes[5].y) == (20, 140)

    def test_canvas_size(self):
        classification = _classification([(_el(i), KEEP) for i in range(7)])
        layout = swimlane_layout(classification, LayoutMode.AS_IS)
        lane = layout.lanes[0]
        assert layout.width == max(600, lane.width + 40) + 40
        assert layout.height == 20 + lane.height + 30 + 40

    def test_small_canvas_keeps_minimum_width(self):
        layout = swimlane_layout(_classification([(_el(1), KEEP)]), LayoutMode.AS_IS)
        assert layout.width == 640

    def test_hidden_elements_take_no_slot(self):
        classification = _classification([
            (_el(1), KEEP),
            (_el(2), ADD),
            (_el(3), KEEP),
        ])
        layout = swimlane_layout(classification, LayoutMode.AS_IS)
        assert [(n.item.id, n.x) for n in layout.nodes] == [("e1", 20), ("e3", 260)]

    def test_lanes_follow_layer_order(self):
        classification = _classification([
            (_el(1, Layer.TECHNOLOGY), KEEP),
            (_el(2, Layer.MOTIVATION), KEEP),
            (_el(3, Layer.BUSINESS), KEEP),
        ])
        layout = swimlane_layout(classification, LayoutMode.MIGRATION)
        assert [lane.layer for lane in layout.lanes] == [Layer.MOTIVATION, Layer.BUSINESS, Layer.TECHNOLOGY]
        assert layout.lanes[1].y == layout.lanes[0].y + layout.lanes[0].height + 30

    def test_edges_need_visible_endpoints(self):
        e1, e2, e3 = _el(1), _el(2), _el(3)
        classification = _classification(
            [(e1, KEEP), (e2, REMOVE), (e3, ADD)],
            [(_rel(1, "e1", "e2"), REMOVE), (_rel(2, "e1", "e3"), ADD)],
        )
        as_is = swimlane_layout(classification, LayoutMode.AS_IS)
        target = swimlane_layout(classification, LayoutMode.TARGET)
        migration = swimlane_layout(classification, LayoutMode.MIGRATION)
        assert [e.id for e in as_is.edges] == ["r1"]
        assert [e.id for e in target.edges] == ["r2"]
        assert [e.id for e in migration.edges] == ["r1", "r2"]

    def test_empty_classification(self):
        layout = swimlane_layout(_classification([]), LayoutMode.TARGET)
        assert layout.lanes == []
        assert (layout.width, layout.height) == (640, 60)
