import logging
from dataclasses import dataclass
from typing import Optional

from archexport.compiler.layout import LayoutMode
from archexport.compiler.render_archimate import serialize_to_xml
from archexport.compiler.render_drawio import new_cell_ids, render_drawio
from archexport.compiler.summary import (
    ArchimateSummary,
    DrawioSummary,
    archimate_summary,
    drawio_summary,
)
from archexport.config import DRAWIO_HOST
from archexport.ir.model import Model
from archexport.migration.classifier import Classification, classify_migration
from archexport.pipeline.controller import coerce_documents, extract_model

logger = logging.getLogger(__name__)

SINGLE_PAGES = (LayoutMode.AS_IS, LayoutMode.TARGET, LayoutMode.MIGRATION)


@dataclass(frozen=True)
class ArchimateExport:
    xml: str
    model: Model
    summary: ArchimateSummary


@dataclass(frozen=True)
class DrawioExport:
    as_is_xml: str
    target_xml: str
    migration_xml: str
    combined_xml: str
    model: Model
    classification: Classification
    summary: DrawioSummary


def export_to_archimate(
    documents,
    name: Optional[str] = None,
    exported_at: Optional[str] = None,
) -> ArchimateExport:
    """
    Extract a model from *documents* and serialize it as Open Exchange XML.

    The output is byte-for-byte reproducible only when *exported_at* is
    given. Left as None, the current UTC time is written into the
    ``<organizations>`` note, so two calls differ in that line.
    """
    model = extract_model(documents, name=name, exported_at=exported_at)
    xml = serialize_to_xml(model)
    summary = archimate_summary(model)

    logger.info(
        "ArchiMate export: %d elements, %d relationships, %d views",
        summary.total_elements,
        summary.total_relationships,
        summary.total_views,
    )
    return ArchimateExport(xml=xml, model=model, summary=summary)


def export_to_drawio(
    documents,
    name: Optional[str] = None,
    exported_at: Optional[str] = None,
    host: str = DRAWIO_HOST,
) -> DrawioExport:
    """
    Render the As-Is, Target and Migration pages plus the combined file.

    *exported_at* becomes the mxfile ``modified`` attribute; pass it to get
    identical bytes across calls, otherwise the current UTC time is used.
    """
    docs = coerce_documents(documents)
    model = extract_model(docs, name=name, exported_at=exported_at)
    classification = classify_migration(model, docs)
    modified = model.metadata.exported_at

    # Single-page files each count cell ids from scratch
    as_is, target, migration = (
        render_drawio(classification, [mode], host, modified, ids=new_cell_ids())
        for mode in SINGLE_PAGES
    )
    # The combined file shares one counter across all pages
    combined = render_drawio(classification, SINGLE_PAGES, host, modified, ids=new_cell_ids())

    summary = drawio_summary(model, classification, diagram_count=len(SINGLE_PAGES))
    logger.info(
        "draw.io export: %d elements (%s), %d relationships",
        summary.total_elements,
        ", ".join(f"{k}={v}" for k, v in summary.by_migration_status.items()),
        summary.total_relationships,
    )
    return DrawioExport(
        as_is_xml=as_is,
        target_xml=target,
        migration_xml=migration,
        combined_xml=combined,
        model=model,
        classification=classification,
        summary=summary,
    )
