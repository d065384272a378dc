from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage

ROADMAP_PROPERTIES = ["Timeline", "Quarter", "Start", "End", "Status", "Priority", "Owner"]


class RoadmapStage(ExtractionStage):
    """Roadmap / migration plan rows become Work Packages."""

    name = "roadmap"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Initiative", "Work Package", "Phase", "Milestone")
        if not name:
            return
        context.add_element(
            "wp",
            ElementType.WORK_PACKAGE,
            name,
            Layer.IMPLEMENTATION,
            source=document.name,
            documentation=cell(row, "Description"),
            properties={column.lower(): cell(row, column) for column in ROADMAP_PROPERTIES},
        )
