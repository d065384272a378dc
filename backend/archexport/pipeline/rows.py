"""
Row-level helpers shared by every extraction stage.
"""

import logging
from typing import Optional

from archexport.dsl.mermaid import MermaidGraph, parse_mermaid_graphs
from archexport.ir.model import Document, Element, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext

logger = logging.getLogger(__name__)

PLACEHOLDERS = {"-", "n/a"}


def cell(row: TableRow, *columns: str) -> str:
    """First non-empty value among *columns*, in the order given."""
    for column in columns:
        value = row.get(column, "").strip()
        if value:
            return value
    return ""


def meaningful(value: str) -> bool:
    value = value.strip()
    return bool(value) and value.lower() not in PLACEHOLDERS


def is_gap_row(row: TableRow) -> bool:
    return all(meaningful(row.get(col, "")) for col in ("Baseline", "Target", "Gap"))


def gap_documentation(row: TableRow) -> str:
    action = cell(row, "Action") or "TBD"
    return f"Baseline: {row['Baseline'].strip()} → Target: {row['Target'].strip()}. Action: {action}"


def add_gap_element(context: ExtractionContext, row: TableRow, source: str) -> Element:
    return context.add_element(
        "gap",
        ElementType.GAP,
        row["Gap"].strip(),
        Layer.IMPLEMENTATION,
        source=source,
        documentation=gap_documentation(row),
    )


def _resolve_node(
    context: ExtractionContext,
    document: Document,
    graph: MermaidGraph,
    node_id: str,
) -> Optional[Element]:
    for candidate in (graph.label_of(node_id), node_id, node_id.replace("_", " ")):
        element = context.find_in_document(document.name, candidate)
        if element:
            return element
    return None


def ingest_flowcharts(
    context: ExtractionContext,
    document: Document,
    category: str,
    element_type: ElementType,
    layer: Layer,
    relationship_type: RelationshipType,
    group_property: Optional[str] = None,
) -> None:
    """
    One element per distinct flowchart node label, one relationship per edge.

    Nodes whose label already names an element of this document reuse it.
    Edges with an unresolved endpoint are skipped.
    """
    for graph in parse_mermaid_graphs(document.content):
        for node in graph.nodes:
            existing = context.find_in_document(document.name, node.label)
            if existing:
                if group_property and node.subgraph:
                    existing.properties.setdefault(group_property, node.subgraph)
                continue

            properties = {}
            if group_property and node.subgraph:
                properties[group_property] = node.subgraph
            context.add_element(
                category,
                element_type,
                node.label,
                layer,
                source=document.name,
                properties=properties,
            )

        for edge in graph.edges:
            source = _resolve_node(context, document, graph, edge.source)
            target = _resolve_node(context, document, graph, edge.target)
            if not source or not target:
                logger.debug(
                    "%s: flowchart edge %s -> %s has no matching elements",
                    document.name, edge.source, edge.target,
                )
                continue
            context.add_relationship(
                relationship_type,
                source.id,
                target.id,
                name=edge.label,
            )
