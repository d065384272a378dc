from archexport.ir.model import Document, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage


class StakeholderStage(ExtractionStage):
    """
    Stakeholder map -> Stakeholder elements, plus one Driver per stated concern.
    """

    name = "stakeholders"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Stakeholder", "Name", "Actor")
        if not name:
            return

        role = cell(row, "Role")
        context.add_element(
            "stkh",
            ElementType.STAKEHOLDER,
            name,
            Layer.MOTIVATION,
            source=document.name,
            documentation=f"Role: {role}" if role else None,
            properties={
                "interest": cell(row, "Interest"),
                "influence": cell(row, "Influence"),
                "concern": cell(row, "Concern"),
            },
        )

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        stakeholders = [
            el for el in context.elements_from(document.name)
            if el.type is ElementType.STAKEHOLDER
        ]
        for stakeholder in stakeholders:
            concern = stakeholder.properties.get("concern")
            if not concern:
                continue
            driver = context.add_element(
                "drv",
                ElementType.DRIVER,
                concern,
                Layer.MOTIVATION,
                source=document.name,
            )
            context.add_relationship(
                RelationshipType.ASSOCIATION,
                stakeholder.id,
                driver.id,
                name="has concern",
            )
