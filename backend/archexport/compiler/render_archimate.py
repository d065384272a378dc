"""
ArchiMate Open Exchange (3.x) writer.

Output is built line by line so that identical models always produce
byte-identical text.
"""

import logging
from typing import Dict, List

from archexport.ir.errors import InvalidModelError
from archexport.ir.model import Element, Model, Relationship, View
from archexport.utils.xml_text import escape_xml

logger = logging.getLogger(__name__)

EXCHANGE_NS = "http://www.opengroup.org/xsd/archimate/3.0/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = (
    "http://www.opengroup.org/xsd/archimate/3.0/ "
    "http://www.opengroup.org/xsd/archimate/3.1/archimate3_Diagram.xsd"
)
MODEL_IDENTIFIER = "model-archexport"


def view_node_id(element_id: str) -> str:
    return f"vn-{element_id}"


def view_connection_id(relationship_id: str) -> str:
    return f"vc-{relationship_id}"


def property_definition_id(key: str) -> str:
    return f"prop-{key}"


def _text(tag: str, value: str) -> str:
    return f'<{tag} xml:lang="en">{escape_xml(value)}</{tag}>'


class ExchangeDocument:
    """
    Open Exchange XML builder.
    No inference: writes exactly what the model holds.
    """

    def __init__(self, model: Model):
        self.model = model
        self.lines: List[str] = []
        self._element_ids = model.element_ids()

    # ---------- helpers ----------

    def _emit(self, depth: int, line: str):
        self.lines.append("  " * depth + line)

    def _resolvable(self, rel: Relationship) -> bool:
        return rel.source in self._element_ids and rel.target in self._element_ids

    # ---------- sections ----------

    def add_header(self):
        self.lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        self.lines.append(
            f'<model xmlns="{EXCHANGE_NS}"'
            f' xmlns:xsi="{XSI_NS}"'
            f' xsi:schemaLocation="{SCHEMA_LOCATION}"'
            f' identifier="{MODEL_IDENTIFIER}">'
        )
        self._emit(1, _text("name", self.model.name))
        if self.model.documentation:
            self._emit(1, _text("documentation", self.model.documentation))

    def add_element(self, el: Element):
        self._emit(2, f'<element identifier="{escape_xml(el.id)}" xsi:type="{escape_xml(el.type.value)}">')
        self._emit(3, _text("name", el.name))
        if el.documentation:
            self._emit(3, _text("documentation", el.documentation))
        if el.properties:
            self._emit(3, "<properties>")
            for key, value in el.properties.items():
                self._emit(
                    4,
                    f'<property propertyDefinitionRef="{escape_xml(property_definition_id(key))}">'
                    f"{_text('value', value)}</property>",
                )
            self._emit(3, "</properties>")
        self._emit(2, "</element>")

    def add_elements(self):
        self._emit(1, "<elements>")
        for el in self.model.elements:
            self.add_element(el)
        self._emit(1, "</elements>")

    def add_relationships(self):
        self._emit(1, "<relationships>")
        for rel in self.model.relationships:
            if not self._resolvable(rel):
                logger.debug("Dropping dangling relationship %s", rel.id)
                continue
            self._emit(
                2,
                f'<relationship identifier="{escape_xml(rel.id)}"'
                f' xsi:type="{escape_xml(rel.type.value)}"'
                f' source="{escape_xml(rel.source)}"'
                f' target="{escape_xml(rel.target)}">',
            )
            if rel.name:
                self._emit(3, _text("name", rel.name))
            if rel.documentation:
                self._emit(3, _text("documentation", rel.documentation))
            self._emit(2, "</relationship>")
        self._emit(1, "</relationships>")

    def add_property_definitions(self):
        keys: Dict[str, None] = {}
        for el in self.model.elements:
            for key in el.properties:
                keys.setdefault(key, None)
        if not keys:
            return

        self._emit(1, "<propertyDefinitions>")
        for key in keys:
            self._emit(
                2,
                f'<propertyDefinition identifier="{escape_xml(property_definition_id(key))}" type="string">'
                f"{_text('name', key)}</propertyDefinition>",
            )
        self._emit(1, "</propertyDefinitions>")

    def add_view(self, view: View):
        viewpoint = f' viewpoint="{escape_xml(view.viewpoint)}"' if view.viewpoint else ""
        self._emit(3, f'<view identifier="{escape_xml(view.id)}"{viewpoint}>')
        self._emit(4, _text("name", view.name))

        on_view = set()
        for node in view.nodes:
            if node.element_ref not in self._element_ids:
                continue
            on_view.add(node.element_ref)
            self._emit(
                4,
                f'<node identifier="{escape_xml(view_node_id(node.element_ref))}"'
                f' elementRef="{escape_xml(node.element_ref)}"'
                f' x="{node.x}" y="{node.y}" w="{node.w}" h="{node.h}" />',
            )

        for conn in view.connections:
            if conn.source_ref not in on_view or conn.target_ref not in on_view:
                continue
            self._emit(
                4,
                f'<connection identifier="{escape_xml(view_connection_id(conn.relationship_ref))}"'
                f' relationshipRef="{escape_xml(conn.relationship_ref)}"'
                f' source="{escape_xml(view_node_id(conn.source_ref))}"'
                f' target="{escape_xml(view_node_id(conn.target_ref))}" />',
            )

        self._emit(3, "</view>")

    def add_views(self):
        if not self.model.views:
            return
        self._emit(1, "<views>")
        self._emit(2, "<diagrams>")
        for view in self.model.views:
            self.add_view(view)
        self._emit(2, "</diagrams>")
        self._emit(1, "</views>")

    def add_organizations(self):
        meta = self.model.metadata
        self._emit(1, "<organizations>")
        self._emit(2, "<item>")
        self._emit(3, _text("label", "archexport Export"))
        self._emit(
            3,
            _text(
                "documentation",
                f"Generated by archexport v{meta.generator_version} at {meta.exported_at}",
            ),
        )
        self._emit(2, "</item>")
        self._emit(1, "</organizations>")

    # ---------- output ----------

    def render(self) -> str:
        self.lines = []
        self.add_header()
        self.add_elements()
        self.add_relationships()
        self.add_property_definitions()
        self.add_views()
        self.add_organizations()
        self.lines.append("</model>")
        return "\n".join(self.lines)


def serialize_to_xml(model: Model) -> str:
    """Serialize *model* to an Open Exchange XML document."""
    if not isinstance(model, Model):
        raise InvalidModelError(
            f"serialize_to_xml expects a Model, got {type(model).__name__}"
        )
    return ExchangeDocument(model).render()
