import re

from archexport.ir.model import Document, ElementType, Layer, RelationshipType
from archexport.parsing.markdown import TableRow
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import cell, ingest_flowcharts
from archexport.pipeline.stage import ExtractionStage

# First match wins
TECHNOLOGY_KEYWORDS = [
    (re.compile(r"kubernetes|docker|container|k8s", re.I), ElementType.SYSTEM_SOFTWARE),
    (re.compile(r"database|postgres|mysql|redis|mongo|dynamo|rds", re.I), ElementType.SYSTEM_SOFTWARE),
    (re.compile(r"api|gateway|load.?balancer|cdn|cloudfront", re.I), ElementType.TECHNOLOGY_SERVICE),
    (re.compile(r"network|vpc|subnet|firewall|dns", re.I), ElementType.COMMUNICATION_NETWORK),
    (re.compile(r"server|instance|vm|ec2|compute", re.I), ElementType.DEVICE),
]


def classify_technology(text: str) -> ElementType:
    for pattern, element_type in TECHNOLOGY_KEYWORDS:
        if pattern.search(text):
            return element_type
    return ElementType.NODE


class TechnologyStage(ExtractionStage):
    name = "technology"

    def extract_row(self, context: ExtractionContext, document: Document, row: TableRow) -> None:
        name = cell(row, "Component", "Platform")
        technology = cell(row, "Technology")
        if name or technology:
            context.add_element(
                "tnode",
                classify_technology(f"{technology} {name}"),
                name or technology,
                Layer.TECHNOLOGY,
                source=document.name,
                documentation=cell(row, "Description"),
                properties={
                    "technology": technology,
                    "environment": cell(row, "Environment"),
                    "scaling": cell(row, "Scaling"),
                    "sla": cell(row, "SLA"),
                    "status": cell(row, "Status"),
                },
            )
            return

        standard = cell(row, "Standard", "Technology Standard")
        if standard:
            context.add_element(
                "tstd",
                ElementType.CONSTRAINT,
                standard,
                Layer.MOTIVATION,
                source=document.name,
                documentation=cell(row, "Rationale", "Description"),
            )

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        ingest_flowcharts(
            context,
            document,
            category="tgnode",
            element_type=ElementType.NODE,
            layer=Layer.TECHNOLOGY,
            relationship_type=RelationshipType.SERVING,
            group_property="environment",
        )
