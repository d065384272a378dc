import re

from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow, normalize_newlines
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage

# ### P-01: Cloud First
PRINCIPLE_HEADING_RE = re.compile(r"^#{2,4}\s+(P-\d+)[\s:]+(.+)$", re.MULTILINE)


class PrincipleStage(ExtractionStage):
    name = "principles"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Principle", "Name")
        if not name:
            return

        principle_id = cell(row, "ID", "Id")
        context.add_element(
            "prin",
            ElementType.PRINCIPLE,
            f"{principle_id}: {name}" if principle_id else name,
            Layer.MOTIVATION,
            source=document.name,
            documentation=cell(row, "Rationale", "Description"),
            properties={"implications": cell(row, "Implications")},
        )

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        # Headings only add principles the tables did not already declare
        for match in PRINCIPLE_HEADING_RE.finditer(normalize_newlines(document.content)):
            principle_id, title = match.group(1), match.group(2).strip()
            if context.has_name_prefix(f"{principle_id}:"):
                continue
            context.add_element(
                "prin",
                ElementType.PRINCIPLE,
                f"{principle_id}: {title}",
                Layer.MOTIVATION,
                source=document.name,
            )
