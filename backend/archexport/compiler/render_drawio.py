"""
draw.io (mxGraph) writer.

Each page is an ``<mxGraphModel><root>`` cell tree: the two bootstrap
cells, one swimlane per layer, one vertex per element, one edge per
visible relationship. Pages rendered into the same file share one
``IdGenerator`` so no two cells anywhere in the file share an id.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from archexport.compiler.layout import (
    LAYER_HEADER_HEIGHT,
    NODE_HEIGHT,
    NODE_WIDTH,
    PAGE_NAMES,
    LayoutMode,
    SwimlaneLayout,
    swimlane_layout,
)
from archexport.ir.errors import InvalidModelError
from archexport.migration.classifier import Classification, MigrationStatus
from archexport.pipeline.context import IdGenerator
from archexport.utils.xml_text import escape_xml, truncate
from archexport.visual.visual_style import (
    EDGE_COLOR,
    FONT_COLOR,
    MIGRATION_STYLE,
    REMOVED_EDGE_DASH,
    layer_style,
)

logger = logging.getLogger(__name__)

MIN_PAGE_WIDTH = 800
MIN_PAGE_HEIGHT = 600
NODE_LABEL_MAX = 40
EDGE_LABEL_MAX = 30
LEGEND_WIDTH = 260
LEGEND_HEIGHT = 140
LEGEND_OFFSET = 280
LEGEND_Y = 20

INDENT = "      "


def new_cell_ids() -> IdGenerator:
    return IdGenerator(prefix="dio")


def _geometry(x: int, y: int, width: int, height: int) -> str:
    return f'<mxGeometry x="{x}" y="{y}" width="{width}" height="{height}" as="geometry" />'


def _vertex(cell_id: str, value: str, style: str, parent: str, geometry: str) -> str:
    return (
        f'{INDENT}<mxCell id="{cell_id}" value="{escape_xml(value)}" '
        f'style="{style}" vertex="1" parent="{parent}">{geometry}</mxCell>'
    )


@dataclass
class DrawioPage:
    name: str
    cells: List[str]
    width: int
    height: int


class PageBuilder:
    def __init__(self, layout: SwimlaneLayout, ids: IdGenerator):
        self.layout = layout
        self.ids = ids
        self.cells: List[str] = []
        self._cell_of: Dict[str, str] = {}  # element id -> vertex id

    @property
    def migration(self) -> bool:
        return self.layout.mode is LayoutMode.MIGRATION

    def add_lanes(self):
        for lane in self.layout.lanes:
            colors = layer_style(lane.layer)
            lane_id = self.ids.next("lane")
            self.cells.append(_vertex(
                lane_id,
                f"{lane.layer.value} Layer",
                f"swimlane;startSize={LAYER_HEADER_HEIGHT};"
                f"fillColor={colors['fill']};strokeColor={colors['stroke']};"
                "rounded=1;arcSize=8;fontStyle=1;fontSize=13;",
                "1",
                _geometry(lane.x, lane.y, lane.width, lane.height),
            ))

            for node in lane.nodes:
                if self.migration:
                    palette = MIGRATION_STYLE[node.item.status]
                    fill, stroke, font = palette["fill"], palette["stroke"], palette["font"]
                    suffix = palette["suffix"]
                else:
                    fill, stroke, font = colors["fill"], colors["stroke"], FONT_COLOR
                    suffix = ""

                cell_id = self.ids.next("node")
                self._cell_of[node.item.id] = cell_id
                self.cells.append(_vertex(
                    cell_id,
                    truncate(node.item.name, NODE_LABEL_MAX) + suffix,
                    "rounded=1;whiteSpace=wrap;html=1;"
                    f"fillColor={fill};strokeColor={stroke};fontColor={font};"
                    "fontSize=11;arcSize=12;",
                    lane_id,
                    _geometry(node.x, node.y, NODE_WIDTH, NODE_HEIGHT),
                ))

    def add_edges(self):
        for edge in self.layout.edges:
            rel = edge.relationship
            source = self._cell_of.get(rel.source)
            target = self._cell_of.get(rel.target)
            if not source or not target:
                continue

            style = "edgeStyle=orthogonalEdgeStyle;rounded=1;"
            if self.migration:
                style += f"strokeColor={MIGRATION_STYLE[edge.status]['stroke']};"
                if edge.status is MigrationStatus.REMOVE:
                    style += REMOVED_EDGE_DASH
            else:
                style += f"strokeColor={EDGE_COLOR};"

            label = truncate(rel.name, EDGE_LABEL_MAX) if rel.name else ""
            self.cells.append(
                f'{INDENT}<mxCell id="{self.ids.next("edge")}" value="{escape_xml(label)}" '
                f'style="{style}fontSize=9;" edge="1" parent="1" '
                f'source="{source}" target="{target}">'
                '<mxGeometry relative="1" as="geometry" /></mxCell>'
            )

    def add_legend(self):
        x = self.layout.width - LEGEND_OFFSET
        legend_id = self.ids.next("legend")
        self.cells.append(_vertex(
            legend_id,
            "Legend",
            "swimlane;startSize=24;fillColor=#f5f5f5;strokeColor=#666666;"
            "rounded=1;fontSize=12;fontStyle=1;",
            "1",
            _geometry(x, LEGEND_Y, LEGEND_WIDTH, LEGEND_HEIGHT),
        ))

        swatches = [
            (MigrationStatus.KEEP, 10, 34),
            (MigrationStatus.ADD, 130, 34),
            (MigrationStatus.REMOVE, 10, 74),
        ]
        for status, sx, sy in swatches:
            palette = MIGRATION_STYLE[status]
            self.cells.append(_vertex(
                self.ids.next("lgnd"),
                palette["legend"],
                "rounded=1;whiteSpace=wrap;html=1;"
                f"fillColor={palette['fill']};strokeColor={palette['stroke']};fontSize=10;",
                legend_id,
                _geometry(sx, sy, 110, 30),
            ))

        self.cells.append(_vertex(
            self.ids.next("lgnd"),
            "Removed link (dashed)",
            "rounded=1;whiteSpace=wrap;html=1;fillColor=#f5f5f5;"
            f"strokeColor={MIGRATION_STYLE[MigrationStatus.REMOVE]['stroke']};"
            f"{REMOVED_EDGE_DASH}fontSize=10;",
            legend_id,
            _geometry(130, 74, 110, 30),
        ))

    def build(self) -> DrawioPage:
        self.cells = []
        self.add_lanes()
        self.add_edges()
        if self.migration:
            self.add_legend()
        return DrawioPage(
            name=PAGE_NAMES[self.layout.mode],
            cells=self.cells,
            width=self.layout.width,
            height=self.layout.height,
        )


def build_page(classification: Classification, mode: LayoutMode, ids: IdGenerator) -> DrawioPage:
    return PageBuilder(swimlane_layout(classification, mode), ids).build()


def wrap_pages(pages: Sequence[DrawioPage], ids: IdGenerator, host: str, modified: str) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<mxfile host="{escape_xml(host)}" modified="{escape_xml(modified)}" type="device">',
    ]
    for page in pages:
        lines.append(f'  <diagram name="{escape_xml(page.name)}" id="{ids.next("diag")}">')
        lines.append(
            '    <mxGraphModel dx="1024" dy="768" grid="1" gridSize="10" guides="1" '
            'tooltips="1" connect="1" arrows="1" fold="1" page="1" pageScale="1" '
            f'pageWidth="{max(page.width, MIN_PAGE_WIDTH)}" '
            f'pageHeight="{max(page.height, MIN_PAGE_HEIGHT)}">'
        )
        lines.append("      <root>")
        lines.append('      <mxCell id="0" />')
        lines.append('      <mxCell id="1" parent="0" />')
        lines.extend(page.cells)
        lines.append("      </root>")
        lines.append("    </mxGraphModel>")
        lines.append("  </diagram>")
    lines.append("</mxfile>")
    return "\n".join(lines)


def _check(classification: Optional[Classification]):
    if not isinstance(classification, Classification):
        raise InvalidModelError(
            f"draw.io rendering expects a Classification, got {type(classification).__name__}"
        )


def render_drawio(
    classification: Classification,
    modes: Sequence[LayoutMode],
    host: str,
    modified: str,
    ids: Optional[IdGenerator] = None,
) -> str:
    """Render one page per mode into a single ``<mxfile>``."""
    _check(classification)
    ids = ids or new_cell_ids()
    pages = [build_page(classification, mode, ids) for mode in modes]
    logger.debug("Rendered %d draw.io page(s), %d cell ids", len(pages), ids.issued)
    return wrap_pages(pages, ids, host, modified)
