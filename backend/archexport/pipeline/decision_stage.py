import re

from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow, normalize_newlines
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage

# ## AD-01: Use PostgreSQL
ADR_HEADING_RE = re.compile(r"^##\s+(AD-\d+)[:\s]+(.+)$", re.MULTILINE)


def _adr_status(content: str, adr_id: str) -> str:
    match = re.search(
        re.escape(adr_id) + r".*?\*\*Status:?\*\*[:\s]*([^\n*]+)",
        content,
        re.IGNORECASE | re.DOTALL,
    )
    if match and match.group(1).strip():
        return match.group(1).strip()
    return "Unknown"


class DecisionStage(ExtractionStage):
    """Architecture decision records become Assessments."""

    name = "decisions"

    def extract(self, context: ExtractionContext, document: Document) -> None:
        # Headings first so the log table does not duplicate them
        content = normalize_newlines(document.content)
        for match in ADR_HEADING_RE.finditer(content):
            adr_id, title = match.group(1), match.group(2).strip()
            status = _adr_status(content, adr_id)
            context.add_element(
                "adr",
                ElementType.ASSESSMENT,
                f"{adr_id}: {title}",
                Layer.MOTIVATION,
                source=document.name,
                documentation=f"Status: {status}",
                properties={"status": status},
            )

        super().extract(context, document)

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        decision_id = cell(row, "ID", "Decision ID")
        title = cell(row, "Title", "Decision", "Name")
        if not decision_id or not title:
            return
        if context.has_name_prefix(f"{decision_id}:"):
            return

        status = cell(row, "Status")
        context.add_element(
            "adr",
            ElementType.ASSESSMENT,
            f"{decision_id}: {title}",
            Layer.MOTIVATION,
            source=document.name,
            documentation=f"Status: {status}" if status else None,
            properties={"status": status},
        )
