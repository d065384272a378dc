from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage


class RequirementStage(ExtractionStage):
    """Requirements catalogue rows; NFRs are modelled as Constraints."""

    name = "requirements"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Requirement", "Name", "Description", "Title")
        if not name:
            return

        is_nfr = "nfr" in (cell(row, "Type").lower(), cell(row, "Category").lower())
        requirement_id = cell(row, "ID", "Id", "Req ID")

        context.add_element(
            "req",
            ElementType.CONSTRAINT if is_nfr else ElementType.REQUIREMENT,
            f"{requirement_id}: {name}" if requirement_id else name,
            Layer.MOTIVATION,
            source=document.name,
            documentation=cell(row, "Description", "Detail", "Acceptance Criteria"),
            properties={
                "priority": cell(row, "Priority"),
                "status": cell(row, "Status"),
                "target": cell(row, "Target"),
            },
        )
