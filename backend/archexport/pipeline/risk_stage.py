from archexport.ir.model import Document, ElementType, Layer
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage


class RiskStage(ExtractionStage):
    name = "risks"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Risk", "Title", "Name", "Issue")
        if not name:
            return

        risk_id = cell(row, "ID", "Risk ID")
        context.add_element(
            "risk",
            ElementType.ASSESSMENT,
            f"{risk_id}: {name}" if risk_id else name,
            Layer.MOTIVATION,
            source=document.name,
            documentation=cell(row, "Mitigation", "Response"),
            properties={
                "probability": cell(row, "Probability"),
                "impact": cell(row, "Impact"),
                "status": cell(row, "Status"),
                "owner": cell(row, "Owner"),
            },
        )
