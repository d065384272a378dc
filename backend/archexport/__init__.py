from archexport.compiler.compiler import (
    ArchimateExport,
    DrawioExport,
    export_to_archimate,
    export_to_drawio,
)
from archexport.compiler.render_archimate import serialize_to_xml
from archexport.compiler.render_drawio import render_drawio
from archexport.compiler.summary import (
    archimate_summary,
    drawio_summary,
    format_archimate_summary_markdown,
    format_drawio_summary_markdown,
)
from archexport.ir.errors import ExportError, InvalidDocumentError, InvalidModelError
from archexport.ir.model import Document, Model
from archexport.migration.classifier import classify_migration
from archexport.pipeline.controller import extract_model

__all__ = [
    "ArchimateExport",
    "Document",
    "DrawioExport",
    "ExportError",
    "InvalidDocumentError",
    "InvalidModelError",
    "Model",
    "archimate_summary",
    "classify_migration",
    "drawio_summary",
    "export_to_archimate",
    "export_to_drawio",
    "extract_model",
    "format_archimate_summary_markdown",
    "format_drawio_summary_markdown",
    "render_drawio",
    "serialize_to_xml",
]
