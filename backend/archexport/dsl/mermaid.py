"""
Mermaid flowchart reader.

Only ``graph TD|LR|TB|RL|BT`` blocks are read. Subgraphs are flat: the most
recently opened subgraph tags every node first seen until its ``end``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from archexport.parsing.markdown import normalize_newlines

logger = logging.getLogger(__name__)

MERMAID_BLOCK_RE = re.compile(r"```mermaid[ \t]*\n(.*?)```", re.DOTALL)
GRAPH_DIRECTIVE_RE = re.compile(r"graph\s+(TD|LR|TB|RL|BT)", re.IGNORECASE)
SUBGRAPH_RE = re.compile(r"^subgraph\s+(.+)", re.IGNORECASE)
END_RE = re.compile(r"^end$", re.IGNORECASE)

# A["Label"], A[Label], A(Label), A((Label)), A{Label}
NODE_RE = re.compile(r"([A-Za-z0-9_]+)(\[[^\]]*\]|\(+[^)]*\)+|\{[^}]*\})?")
# -->, --->, -->|label|, -- label -->
ARROW_RE = re.compile(
    r"\s*(?:-{2,}>|--\s*([^\s|>-][^|>]*?)\s*-{2,}>)\s*(?:\|([^|]*)\|)?\s*"
)


@dataclass
class MermaidNode:
    id: str
    label: str
    subgraph: Optional[str] = None


@dataclass
class MermaidEdge:
    source: str
    target: str
    label: Optional[str] = None


@dataclass
class MermaidGraph:
    direction: str
    nodes: List[MermaidNode] = field(default_factory=list)
    edges: List[MermaidEdge] = field(default_factory=list)

    def label_of(self, node_id: str) -> str:
        for node in self.nodes:
            if node.id == node_id:
                return node.label
        return node_id


def _clean_label(shape: Optional[str]) -> Optional[str]:
    if not shape:
        return None
    label = shape.strip("[](){}").strip().strip("\"'").strip()
    return label or None


class _GraphBuilder:
    def __init__(self, direction: str):
        self.direction = direction
        self.edge_order: List[str] = []
        self.declared_order: List[str] = []
        self.labels: Dict[str, str] = {}
        self.subgraphs: Dict[str, Optional[str]] = {}
        self.edges: List[MermaidEdge] = []

    def touch(self, node_id: str, shape: Optional[str], subgraph: Optional[str]):
        self.subgraphs.setdefault(node_id, subgraph)
        label = _clean_label(shape)
        if label and node_id not in self.labels:
            self.labels[node_id] = label

    def add_edge(self, source: str, target: str, label: Optional[str]):
        self.edges.append(MermaidEdge(source=source, target=target, label=label))
        for node_id in (source, target):
            if node_id not in self.edge_order:
                self.edge_order.append(node_id)

    def declare(self, node_id: str):
        if node_id not in self.declared_order:
            self.declared_order.append(node_id)

    def build(self) -> MermaidGraph:
        order = self.edge_order + [
            n for n in self.declared_order if n not in self.edge_order
        ]
        nodes = [
            MermaidNode(
                id=node_id,
                label=self.labels.get(node_id, node_id),
                subgraph=self.subgraphs.get(node_id),
            )
            for node_id in order
        ]
        return MermaidGraph(direction=self.direction, nodes=nodes, edges=self.edges)


def _statements(line: str) -> List[str]:
    # ";" separates statements unless it sits inside a label
    parts, depth, quote, start = [], 0, None, 0
    for i, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in '"|':
            quote = ch
        elif ch in "[({":
            depth += 1
        elif ch in "])}" and depth:
            depth -= 1
        elif ch == ";" and depth == 0:
            parts.append(line[start:i])
            start = i + 1
    parts.append(line[start:])
    return [part.strip() for part in parts if part.strip()]


def _parse_statement(line: str, builder: _GraphBuilder, subgraph: Optional[str]):
    head = NODE_RE.match(line)
    if not head:
        return

    source, source_shape = head.group(1), head.group(2)
    pos = head.end()
    chained = False

    # A --> B --> C yields two edges
    while True:
        arrow = ARROW_RE.match(line, pos)
        if not arrow:
            break
        tail = NODE_RE.match(line, arrow.end())
        if not tail:
            break

        label = (arrow.group(2) or arrow.group(1) or "").strip() or None
        builder.touch(source, source_shape, subgraph)
        builder.touch(tail.group(1), tail.group(2), subgraph)
        builder.add_edge(source, tail.group(1), label)

        source, source_shape = tail.group(1), tail.group(2)
        pos = tail.end()
        chained = True

    if not chained and source_shape and line[pos:].strip() in ("", ";"):
        builder.touch(source, source_shape, subgraph)
        builder.declare(source)


def parse_mermaid_graph(body: str) -> Optional[MermaidGraph]:
    directive = GRAPH_DIRECTIVE_RE.search(body)
    if not directive:
        return None

    builder = _GraphBuilder(direction=directive.group(1).upper())
    current_subgraph: Optional[str] = None

    for raw in body.split("\n"):
        line = raw.strip()
        if not line or line.startswith("%%"):
            continue
        head = GRAPH_DIRECTIVE_RE.match(line)
        if head:
            # graph LR; A --> B
            line = line[head.end():]

        for statement in _statements(line):
            sub = SUBGRAPH_RE.match(statement)
            if sub:
                current_subgraph = sub.group(1).strip()
                continue
            if END_RE.match(statement):
                current_subgraph = None
                continue

            _parse_statement(statement, builder, current_subgraph)

    graph = builder.build()
    if not graph.nodes and not graph.edges:
        return None
    return graph


def parse_mermaid_graphs(text: str) -> List[MermaidGraph]:
    """Parse every fenced mermaid flowchart in *text*."""
    graphs: List[MermaidGraph] = []
    for block in MERMAID_BLOCK_RE.finditer(normalize_newlines(text)):
        graph = parse_mermaid_graph(block.group(1))
        if graph is None:
            logger.debug("Skipping mermaid block: not a flowchart or empty")
            continue
        graphs.append(graph)
    return graphs
