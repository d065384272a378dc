import logging
from typing import List

from fastapi import APIRouter, HTTPException

from archexport.api.serializers import serialize_ir
from archexport.compiler.compiler import export_to_archimate, export_to_drawio
from archexport.compiler.summary import (
    format_archimate_summary_markdown,
    format_drawio_summary_markdown,
)
from archexport.config import GENERATOR_VERSION
from archexport.ir.errors import ExportError
from archexport.ir.model import Document
from archexport.schemas import (
    ArchimateResponse,
    DrawioResponse,
    ExportRequest,
    SummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _documents(request: ExportRequest) -> List[Document]:
    return [Document(name=doc.name, content=doc.content) for doc in request.documents]


def _bad_request(exc: ExportError) -> HTTPException:
    logger.warning("Export rejected: %s", exc)
    return HTTPException(status_code=400, detail=str(exc))


@router.get("/health")
def health():
    return {"status": "ok", "version": GENERATOR_VERSION}


@router.post("/export/archimate", response_model=ArchimateResponse)
def export_archimate(request: ExportRequest):
    try:
        result = export_to_archimate(
            _documents(request),
            name=request.name,
            exported_at=request.exported_at,
        )
    except ExportError as exc:
        raise _bad_request(exc)

    return ArchimateResponse(
        xml=result.xml,
        summary=serialize_ir(result.summary),
        model=serialize_ir(result.model),
    )


@router.post("/export/drawio", response_model=DrawioResponse)
def export_drawio(request: ExportRequest):
    try:
        result = export_to_drawio(
            _documents(request),
            name=request.name,
            exported_at=request.exported_at,
        )
    except ExportError as exc:
        raise _bad_request(exc)

    return DrawioResponse(
        as_is=result.as_is_xml,
        target=result.target_xml,
        migration=result.migration_xml,
        combined=result.combined_xml,
        summary=serialize_ir(result.summary),
    )


@router.post("/export/summary", response_model=SummaryResponse)
def export_summary(request: ExportRequest):
    documents = _documents(request)
    try:
        archimate = export_to_archimate(documents, name=request.name, exported_at=request.exported_at)
        drawio = export_to_drawio(documents, name=request.name, exported_at=request.exported_at)
    except ExportError as exc:
        raise _bad_request(exc)

    markdown = "\n\n".join([
        format_archimate_summary_markdown(archimate.summary),
        format_drawio_summary_markdown(drawio.summary),
    ])
    return SummaryResponse(
        archimate=serialize_ir(archimate.summary),
        drawio=serialize_ir(drawio.summary),
        markdown=markdown,
    )
