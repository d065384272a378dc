from pydantic import BaseModel
from typing import Optional, Dict, Any, List


class DocumentPayload(BaseModel):
    name: str  # filename, e.g. "C1_Application_Architecture.md"
    content: str


class ExportRequest(BaseModel):
    name: Optional[str] = None  # vault / model name
    documents: List[DocumentPayload] = []
    exported_at: Optional[str] = None  # pin the timestamp for reproducible output


class ArchimateResponse(BaseModel):
    xml: str
    summary: Dict[str, Any]
    model: Dict[str, Any]


class DrawioResponse(BaseModel):
    as_is: str
    target: str
    migration: str
    combined: str
    summary: Dict[str, Any]


class SummaryResponse(BaseModel):
    archimate: Dict[str, Any]
    drawio: Dict[str, Any]
    markdown: str
