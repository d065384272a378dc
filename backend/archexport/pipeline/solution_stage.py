from archexport.ir.model import Document, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell
from archexport.pipeline.stage import ExtractionStage


class SolutionStage(ExtractionStage):
    """
    Phase E: building-block mappings and build-vs-buy options.

    An SBB becomes a Deliverable realizing its ABB. The ABB is looked up
    across everything extracted so far and only created when missing.
    """

    name = "solutions"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        abb_name = cell(row, "ABB")
        sbb_name = cell(row, "SBB")
        if abb_name and sbb_name:
            self._add_building_block(context, document, row, abb_name, sbb_name)
            return

        option = cell(row, "Option")
        if option and cell(row, "Buy/Build", "Type"):
            context.add_element(
                "coa",
                ElementType.COURSE_OF_ACTION,
                option,
                Layer.STRATEGY,
                source=document.name,
                documentation=cell(row, "Rationale", "Pros"),
            )

    def _add_building_block(
        self,
        context: ExtractionContext,
        document: Document,
        row: TableRow,
        abb_name: str,
        sbb_name: str,
    ) -> None:
        # Resolve before adding the SBB so it can never match itself
        abb = context.find_containing(abb_name)

        vendor = cell(row, "Vendor")
        sbb = context.add_element(
            "sbb",
            ElementType.DELIVERABLE,
            sbb_name,
            Layer.IMPLEMENTATION,
            source=document.name,
            documentation=f"Vendor: {vendor}" if vendor else None,
            properties={
                "acquisition": cell(row, "Buy/Build"),
                "status": cell(row, "Status"),
                "vendor": vendor,
            },
        )

        if abb is None:
            abb = context.add_element(
                "abb",
                ElementType.APPLICATION_COMPONENT,
                abb_name,
                Layer.APPLICATION,
                source=document.name,
            )

        context.add_relationship(
            RelationshipType.REALIZATION,
            sbb.id,
            abb.id,
            name=f"{sbb_name} realizes {abb_name}",
        )
