import re

from archexport.ir.model import Document, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell, ingest_flowcharts
from archexport.pipeline.stage import ExtractionStage

INTERFACE_SPLIT_RE = re.compile(r"[,;]")


class ApplicationStage(ExtractionStage):
    """
    Phase C documents: application portfolio, data entities, services.
    Flowchart nodes become application components linked by flow edges.
    """

    name = "application"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        component = cell(row, "Component", "Application", "Service")
        if component:
            self._add_component(context, document, row, component)
            return

        data_object = cell(row, "Data Object", "Entity", "Data Entity")
        if data_object:
            context.add_element(
                "dobj",
                ElementType.DATA_OBJECT,
                data_object,
                Layer.APPLICATION,
                source=document.name,
                documentation=cell(row, "Description"),
            )
            return

        service = cell(row, "Application Service")
        if service:
            context.add_element(
                "asvc",
                ElementType.APPLICATION_SERVICE,
                service,
                Layer.APPLICATION,
                source=document.name,
                documentation=cell(row, "Description"),
            )

    def _add_component(
        self,
        context: ExtractionContext,
        document: Document,
        row: TableRow,
        name: str,
    ) -> None:
        component = context.add_element(
            "acomp",
            ElementType.APPLICATION_COMPONENT,
            name,
            Layer.APPLICATION,
            source=document.name,
            documentation=cell(row, "Purpose", "Description"),
            properties={
                "owner": cell(row, "Owner"),
                "status": cell(row, "Status"),
            },
        )

        interfaces = cell(row, "Interfaces", "Interface")
        for raw in INTERFACE_SPLIT_RE.split(interfaces):
            interface_name = raw.strip()
            if not interface_name:
                continue
            interface = context.add_element(
                "aifc",
                ElementType.APPLICATION_INTERFACE,
                interface_name,
                Layer.APPLICATION,
                source=document.name,
            )
            context.add_relationship(
                RelationshipType.COMPOSITION,
                component.id,
                interface.id,
            )

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        ingest_flowcharts(
            context,
            document,
            category="anode",
            element_type=ElementType.APPLICATION_COMPONENT,
            layer=Layer.APPLICATION,
            relationship_type=RelationshipType.FLOW,
            group_property="group",
        )
