from archexport.ir.model import Document, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell, ingest_flowcharts
from archexport.pipeline.stage import ExtractionStage


class BusinessStage(ExtractionStage):
    """
    Phase B documents: capabilities, processes, scenarios and functions.
    Flowchart nodes become business processes linked by triggering edges.
    """

    name = "business"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        description = cell(row, "Description")

        capability = cell(row, "Capability", "Business Capability")
        if capability:
            context.add_element(
                "bcap",
                ElementType.CAPABILITY,
                capability,
                Layer.STRATEGY,
                source=document.name,
                documentation=description,
            )
            return

        process = cell(row, "Process", "Business Process")
        if process:
            context.add_element(
                "bprc",
                ElementType.BUSINESS_PROCESS,
                process,
                Layer.BUSINESS,
                source=document.name,
                documentation=description,
            )
            return

        scenario = cell(row, "Scenario")
        if scenario:
            context.add_element(
                "bscn",
                ElementType.BUSINESS_EVENT,
                scenario,
                Layer.BUSINESS,
                source=document.name,
                documentation=description or cell(row, "Outcome"),
            )

        function = cell(row, "Function", "Business Function")
        if function:
            context.add_element(
                "bfn",
                ElementType.BUSINESS_FUNCTION,
                function,
                Layer.BUSINESS,
                source=document.name,
                documentation=description,
            )

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        ingest_flowcharts(
            context,
            document,
            category="bnode",
            element_type=ElementType.BUSINESS_PROCESS,
            layer=Layer.BUSINESS,
            relationship_type=RelationshipType.TRIGGERING,
        )
