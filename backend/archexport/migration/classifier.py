"""
Migration classification (keep / add / remove) for the draw.io export.

Per element, first applicable step wins unless noted:
1. name in the override map (Status/Lifecycle columns, gap cells)
2. baseline-only -> remove, target-only -> add, otherwise keep. Gap
   Baseline/Target cells match by substring; rows under as-is / to-be
   headings match the element name exactly (ignoring case)
3. a retire-like or new-like ``properties["status"]`` overrides step 2
4. Gap elements are always ``add`` (overrides everything)

Relationship status is derived from its endpoints: remove beats add
beats keep.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from archexport.ir.model import Document, Element, ElementType, Layer, Model, Relationship
from archexport.parsing.markdown import TableRow, parse_tables, split_sections
from archexport.pipeline.rows import cell, is_gap_row, meaningful

logger = logging.getLogger(__name__)


class MigrationStatus(Enum):
    KEEP = "keep"
    ADD = "add"
    REMOVE = "remove"


# Status/Lifecycle column values
TABLE_RETIRE_RE = re.compile(r"retire|decommission|sunset|phase.?out|remove|obsolete", re.I)
TABLE_NEW_RE = re.compile(r"new|planned|proposed|emerging|future", re.I)
# properties["status"] values
PROPERTY_RETIRE_RE = re.compile(r"retire|decommission|remove|sunset", re.I)
PROPERTY_NEW_RE = re.compile(r"new|planned|proposed|future", re.I)

BASELINE_HEADING_RE = re.compile(r"\bas[\s-]?is\b|\bbaseline\b|\bcurrent\b", re.I)
TARGET_HEADING_RE = re.compile(r"\bto[\s-]?be\b|\btarget\b|\bfuture\b", re.I)

STATUS_NAME_COLUMNS = ("Component", "Application", "Service", "Name")
SECTION_NAME_COLUMNS = (
    "Component", "Application", "Service", "Name", "Process", "Business Process",
    "Capability", "Business Capability", "Platform", "Technology", "Initiative",
    "Data Object", "Entity", "Data Entity",
)


@dataclass
class MigrationEvidence:
    overrides: Dict[str, MigrationStatus] = field(default_factory=dict)
    baseline_names: Set[str] = field(default_factory=set)
    target_names: Set[str] = field(default_factory=set)
    baseline_sections: Set[str] = field(default_factory=set)
    target_sections: Set[str] = field(default_factory=set)

    def in_baseline(self, name: str) -> bool:
        return _mentioned(name, self.baseline_names) or _listed(name, self.baseline_sections)

    def in_target(self, name: str) -> bool:
        return _mentioned(name, self.target_names) or _listed(name, self.target_sections)


def _mentioned(name: str, names: Set[str]) -> bool:
    if name in names:
        return True
    lowered = name.lower()
    return any(candidate.lower() in lowered for candidate in names)


def _listed(name: str, names: Set[str]) -> bool:
    lowered = name.strip().lower()
    return any(candidate.lower() == lowered for candidate in names)


def heading_context(heading: Optional[str]) -> Optional[str]:
    if not heading:
        return None
    baseline = bool(BASELINE_HEADING_RE.search(heading))
    target = bool(TARGET_HEADING_RE.search(heading))
    if baseline and not target:
        return "baseline"
    if target and not baseline:
        return "target"
    return None


def _collect_row(evidence: MigrationEvidence, row: TableRow, section: Optional[str]) -> None:
    if is_gap_row(row):
        evidence.baseline_names.add(row["Baseline"].strip())
        evidence.target_names.add(row["Target"].strip())
        evidence.overrides[row["Gap"].strip()] = MigrationStatus.ADD
    elif section:
        name = cell(row, *SECTION_NAME_COLUMNS)
        if meaningful(name):
            target = evidence.baseline_sections if section == "baseline" else evidence.target_sections
            target.add(name)

    status = cell(row, "Status", "Lifecycle")
    name = cell(row, *STATUS_NAME_COLUMNS)
    if not name or not status:
        return
    if TABLE_RETIRE_RE.search(status):
        evidence.overrides[name] = MigrationStatus.REMOVE
    elif TABLE_NEW_RE.search(status):
        evidence.overrides[name] = MigrationStatus.ADD


def collect_evidence(documents: Iterable[Document]) -> MigrationEvidence:
    """Scan every document for gap tables, lifecycle columns and as-is/to-be sections."""
    evidence = MigrationEvidence()
    for document in documents:
        section_context: Optional[str] = None
        context_level = 0
        for section in split_sections(document.content):
            if section.heading is not None:
                found = heading_context(section.heading)
                if found:
                    section_context, context_level = found, section.level
                elif section.level <= context_level:
                    # a sibling or parent heading closes the as-is / to-be block
                    section_context, context_level = None, 0
            for table in parse_tables(section.body):
                for row in table:
                    _collect_row(evidence, row, section_context)
    return evidence


def element_status(element: Element, evidence: MigrationEvidence) -> MigrationStatus:
    if element.name in evidence.overrides:
        status = evidence.overrides[element.name]
    else:
        in_baseline = evidence.in_baseline(element.name)
        in_target = evidence.in_target(element.name)
        if in_baseline and not in_target:
            status = MigrationStatus.REMOVE
        elif in_target and not in_baseline:
            status = MigrationStatus.ADD
        else:
            status = MigrationStatus.KEEP

        declared = element.properties.get("status", "")
        if PROPERTY_RETIRE_RE.search(declared):
            status = MigrationStatus.REMOVE
        elif PROPERTY_NEW_RE.search(declared):
            status = MigrationStatus.ADD

    # A gap is by definition something to introduce
    if element.type is ElementType.GAP:
        status = MigrationStatus.ADD
    return status


def relationship_status(source: MigrationStatus, target: MigrationStatus) -> MigrationStatus:
    if MigrationStatus.REMOVE in (source, target):
        return MigrationStatus.REMOVE
    if MigrationStatus.ADD in (source, target):
        return MigrationStatus.ADD
    return MigrationStatus.KEEP


@dataclass(frozen=True)
class ClassifiedElement:
    element: Element
    status: MigrationStatus

    @property
    def id(self) -> str:
        return self.element.id

    @property
    def name(self) -> str:
        return self.element.name

    @property
    def layer(self) -> Layer:
        return self.element.layer


@dataclass(frozen=True)
class ClassifiedRelationship:
    relationship: Relationship
    status: MigrationStatus

    @property
    def id(self) -> str:
        return self.relationship.id


@dataclass(frozen=True)
class Classification:
    elements: tuple
    relationships: tuple

    def status_of(self, element_id: str) -> Optional[MigrationStatus]:
        for item in self.elements:
            if item.id == element_id:
                return item.status
        return None

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in MigrationStatus}
        for item in self.elements:
            counts[item.status.value] += 1
        return counts


def classify_migration(model: Model, documents: Iterable[Document]) -> Classification:
    evidence = collect_evidence(documents)

    elements: List[ClassifiedElement] = [
        ClassifiedElement(element=el, status=element_status(el, evidence))
        for el in model.elements
    ]
    statuses = {item.id: item.status for item in elements}

    relationships = [
        ClassifiedRelationship(
            relationship=rel,
            status=relationship_status(
                statuses.get(rel.source, MigrationStatus.KEEP),
                statuses.get(rel.target, MigrationStatus.KEEP),
            ),
        )
        for rel in model.relationships
    ]

    classification = Classification(elements=tuple(elements), relationships=tuple(relationships))
    logger.debug("Migration classification: %s", classification.counts())
    return classification
