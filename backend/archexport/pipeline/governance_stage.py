from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage


class GovernanceStage(ExtractionStage):
    """Governance controls and checkpoints become Constraints."""

    name = "governance"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Control", "Checkpoint", "Governance", "Review")
        if not name:
            return
        context.add_element(
            "gov",
            ElementType.CONSTRAINT,
            name,
            Layer.MOTIVATION,
            source=document.name,
            documentation=cell(row, "Description", "Frequency"),
        )
