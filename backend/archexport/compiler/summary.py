"""
Export summaries and their markdown rendering.

Counts are keyed by the enum *values* (``"Application"``,
``"ApplicationComponent"``, ``"keep"``) so they serialize as-is.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from archexport.ir.model import Model
from archexport.migration.classifier import Classification, MigrationStatus


@dataclass
class ArchimateSummary:
    total_elements: int
    total_relationships: int
    total_views: int
    by_layer: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=dict)
    source_files: List[str] = field(default_factory=list)
    orphaned_relationships: int = 0


@dataclass
class DrawioSummary:
    total_elements: int
    total_relationships: int
    diagram_count: int
    by_migration_status: Dict[str, int] = field(default_factory=dict)
    by_layer: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=dict)
    source_files: List[str] = field(default_factory=list)
    orphaned_relationships: int = 0


def _bump(counts: Dict[str, int], key: str):
    counts[key] = counts.get(key, 0) + 1


def _source_files(elements) -> List[str]:
    return sorted({el.source for el in elements if el.source})


def archimate_summary(model: Model) -> ArchimateSummary:
    by_layer: Dict[str, int] = {}
    by_type: Dict[str, int] = {}
    for el in model.elements:
        _bump(by_layer, el.layer.value)
        _bump(by_type, el.type.value)

    return ArchimateSummary(
        total_elements=len(model.elements),
        total_relationships=len(model.relationships),
        total_views=len(model.views),
        by_layer=by_layer,
        by_type=by_type,
        source_files=_source_files(model.elements),
        orphaned_relationships=len(model.dangling_relationships()),
    )


def drawio_summary(model: Model, classification: Classification, diagram_count: int = 3) -> DrawioSummary:
    by_layer: Dict[str, int] = {}
    by_type: Dict[str, int] = {}
    for item in classification.elements:
        _bump(by_layer, item.layer.value)
        _bump(by_type, item.element.type.value)

    return DrawioSummary(
        total_elements=len(classification.elements),
        total_relationships=len(classification.relationships),
        diagram_count=diagram_count,
        by_migration_status=classification.counts(),
        by_layer=by_layer,
        by_type=by_type,
        source_files=_source_files(item.element for item in classification.elements),
        orphaned_relationships=len(model.dangling_relationships()),
    )


# ============================================================
# Markdown
# ============================================================

def _by_count(counts: Dict[str, int]):
    # highest first, ties keep insertion order
    return sorted(counts.items(), key=lambda kv: -kv[1])


def _count_table(lines: List[str], title: str, column: str, counts: Dict[str, int], unit: str):
    lines.append(f"\n### {title}\n")
    lines.append(f"| {column} | {unit} |")
    lines.append("|------|------:|")
    for key, count in _by_count(counts):
        lines.append(f"| {key} | {count} |")


def _source_list(lines: List[str], files: List[str]):
    lines.append("\n### Source Files\n")
    for name in files:
        lines.append(f"- `{name}`")


def format_archimate_summary_markdown(summary: ArchimateSummary) -> str:
    lines = [
        "## ArchiMate Export Summary\n",
        "| Metric | Count |",
        "|--------|------:|",
        f"| Elements | {summary.total_elements} |",
        f"| Relationships | {summary.total_relationships} |",
        f"| Views | {summary.total_views} |",
    ]
    if summary.orphaned_relationships:
        lines.append(f"| Orphaned relationships (not exported) | {summary.orphaned_relationships} |")

    _count_table(lines, "By Layer", "Layer", summary.by_layer, "Elements")
    _count_table(lines, "By Element Type", "Type", summary.by_type, "Count")
    _source_list(lines, summary.source_files)
    return "\n".join(lines)


MIGRATION_DESCRIPTIONS = {
    MigrationStatus.KEEP: ("Keep", "Unchanged between As-Is and Target"),
    MigrationStatus.ADD: ("Add", "New in Target Architecture"),
    MigrationStatus.REMOVE: ("Remove", "Retired from As-Is Architecture"),
}


def format_drawio_summary_markdown(summary: DrawioSummary) -> str:
    lines = [
        "## Draw.io Export Summary\n",
        "| Metric | Count |",
        "|--------|------:|",
        f"| Total Elements | {summary.total_elements} |",
        f"| Total Relationships | {summary.total_relationships} |",
        f"| Diagrams Generated | {summary.diagram_count} |",
    ]
    if summary.orphaned_relationships:
        lines.append(f"| Orphaned relationships (not drawn) | {summary.orphaned_relationships} |")

    lines.append("\n### Migration Classification\n")
    lines.append("| Status | Elements | Description |")
    lines.append("|--------|--------:|-------------|")
    for status, (label, description) in MIGRATION_DESCRIPTIONS.items():
        count = summary.by_migration_status.get(status.value, 0)
        lines.append(f"| {label} | {count} | {description} |")

    _count_table(lines, "By Layer", "Layer", summary.by_layer, "Elements")
    _count_table(lines, "By Element Type", "Type", summary.by_type, "Count")

    lines.append("\n### Diagrams Produced\n")
    lines.append("1. **As-Is Architecture**: current state (baseline elements)")
    lines.append("2. **Target Architecture**: future state (target elements)")
    lines.append("3. **Migration Architecture**: colour-coded overlay (red = remove, green = add, blue = keep)")

    _source_list(lines, summary.source_files)
    return "\n".join(lines)
