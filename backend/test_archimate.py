"""
Tests for the Open Exchange writer and the ArchiMate export entry point.
"""

import re
import xml.etree.ElementTree as ET

import pytest

from archexport.compiler.compiler import export_to_archimate
from archexport.compiler.render_archimate import serialize_to_xml
from archexport.compiler.summary import archimate_summary, format_archimate_summary_markdown
from archexport.ir.errors import ExportError, InvalidDocumentError, InvalidModelError
from archexport.ir.model import (
    Element,
    ElementType,
    Layer,
    Model,
    ModelMetadata,
    Relationship,
    RelationshipType,
    View,
    ViewNode,
)
from archexport.utils.xml_text import escape_xml, truncate

NS = {"a": "http://www.opengroup.org/xsd/archimate/3.0/"}
XSI_TYPE = "{http://www.w3.org/2001/XMLSchema-instance}type"


def _model(elements=(), relationships=(), views=(), name="Test") -> Model:
    return Model(
        name=name,
        metadata=ModelMetadata(exported_at="2026-01-01T00:00:00.000Z", document_count=1, generator_version="9.9"),
        elements=tuple(elements),
        relationships=tuple(relationships),
        views=tuple(views),
    )


class TestEscaping:

    def test_five_special_characters(self):
        assert escape_xml("a & b < c > d \" e ' f") == "a &amp; b &lt; c &gt; d &quot; e &apos; f"

    def test_ampersand_is_not_escaped_twice(self):
        assert escape_xml("&lt;") == "&amp;lt;"

    def test_none_is_empty(self):
        assert escape_xml(None) == ""

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("abcdefghij", 5) == "abcd…"


class TestSerializeToXml:

    def test_rejects_non_models(self):
        with pytest.raises(InvalidModelError):
            serialize_to_xml(None)
        with pytest.raises(ExportError):
            serialize_to_xml({"elements": []})

    def test_empty_model_is_valid_xml(self):
        root = ET.fromstring(serialize_to_xml(_model()))
        assert root.tag == "{%s}model" % NS["a"]
        assert root.find("a:elements", NS) is not None
        assert list(root.find("a:elements", NS)) == []
        assert root.find("a:views", NS) is None
        assert root.find("a:propertyDefinitions", NS) is None

    def test_names_are_escaped(self):
        el = Element(id="e1", type=ElementType.APPLICATION_COMPONENT, name="R&D <Portal>", layer=Layer.APPLICATION)
        xml = serialize_to_xml(_model([el]))
        assert "R&amp;D &lt;Portal&gt;" in xml
        element = ET.fromstring(xml).find("a:elements/a:element", NS)
        assert element.find("a:name", NS).text == "R&D <Portal>"
        assert element.get(XSI_TYPE) == "ApplicationComponent"

    def test_dangling_relationships_are_dropped(self):
        a = Element(id="e1", type=ElementType.NODE, name="A", layer=Layer.TECHNOLOGY)
        b = Element(id="e2", type=ElementType.NODE, name="B", layer=Layer.TECHNOLOGY)
        rels = [
            Relationship(id="r1", type=RelationshipType.SERVING, source="e1", target="e2"),
            Relationship(id="r2", type=RelationshipType.SERVING, source="e1", target="gone"),
        ]
        root = ET.fromstring(serialize_to_xml(_model([a, b], rels)))
        ids = [r.get("identifier") for r in root.findall("a:relationships/a:relationship", NS)]
        assert ids == ["r1"]

    def test_property_definitions_in_first_seen_order(self):
        elements = [
            Element(id="e1", type=ElementType.NODE, name="A", layer=Layer.TECHNOLOGY,
                    properties={"status": "Active", "owner": "Ops"}),
            Element(id="e2", type=ElementType.NODE, name="B", layer=Layer.TECHNOLOGY,
                    properties={"sla": "99.9", "status": "Retire"}),
        ]
        root = ET.fromstring(serialize_to_xml(_model(elements)))
        definitions = root.findall("a:propertyDefinitions/a:propertyDefinition", NS)
        assert [d.get("identifier") for d in definitions] == ["prop-status", "prop-owner", "prop-sla"]
        refs = root.findall("a:elements/a:element/a:properties/a:property", NS)
        assert {r.get("propertyDefinitionRef") for r in refs} <= {d.get("identifier") for d in definitions}

    def test_view_nodes_must_resolve(self):
        el = Element(id="e1", type=ElementType.NODE, name="A", layer=Layer.TECHNOLOGY)
        view = View(id="v1", name="V", nodes=(ViewNode("e1", 40, 40, 160, 80), ViewNode("ghost", 0, 0, 1, 1)))
        root = ET.fromstring(serialize_to_xml(_model([el], views=[view])))
        nodes = root.findall("a:views/a:diagrams/a:view/a:node", NS)
        assert [n.get("elementRef") for n in nodes] == ["e1"]
        assert nodes[0].get("identifier") == "vn-e1"

    def test_organizations_carry_version_and_timestamp(self):
        xml = serialize_to_xml(_model())
        assert "Generated by archexport v9.9 at 2026-01-01T00:00:00.000Z" in xml


class TestExportToArchimate:

    def test_vault_export(self, vault, fixed_timestamp):
        result = export_to_archimate(vault, name="TestVault", exported_at=fixed_timestamp)
        root = ET.fromstring(result.xml)

        elements = root.findall("a:elements/a:element", NS)
        assert len(elements) == len(result.model.elements) == 16
        view_ids = [v.get("identifier") for v in root.findall("a:views/a:diagrams/a:view", NS)]
        assert view_ids == ["view-full", "view-biz-motiv", "view-app", "view-tech", "view-impl"]
        assert root.find("a:name", NS).text == "TestVault"

    def test_every_reference_resolves(self, vault, fixed_timestamp):
        root = ET.fromstring(export_to_archimate(vault, exported_at=fixed_timestamp).xml)
        element_ids = {e.get("identifier") for e in root.findall("a:elements/a:element", NS)}
        for rel in root.findall("a:relationships/a:relationship", NS):
            assert rel.get("source") in element_ids
            assert rel.get("target") in element_ids
        for view in root.findall("a:views/a:diagrams/a:view", NS):
            node_ids = {n.get("identifier") for n in view.findall("a:node", NS)}
            for conn in view.findall("a:connection", NS):
                assert conn.get("source") in node_ids
                assert conn.get("target") in node_ids

    def test_output_is_reproducible(self, vault, fixed_timestamp):
        first = export_to_archimate(vault, name="V", exported_at=fixed_timestamp)
        second = export_to_archimate(vault, name="V", exported_at=fixed_timestamp)
        assert first.xml == second.xml

    def test_default_timestamp_is_the_only_difference(self, vault):
        first = export_to_archimate(vault, name="V")
        second = export_to_archimate(vault, name="V")
        stamp = re.compile(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z")
        assert stamp.fullmatch(first.model.metadata.exported_at)
        assert stamp.sub("", first.xml) == stamp.sub("", second.xml)

    def test_empty_vault(self, fixed_timestamp):
        result = export_to_archimate([], exported_at=fixed_timestamp)
        root = ET.fromstring(result.xml)
        assert root.find("a:name", NS).text == "ArchiMate Export"
        assert result.summary.total_elements == 0
        assert result.model.metadata.document_count == 0

    def test_pairs_are_accepted(self, fixed_timestamp):
        result = export_to_archimate(
            [("B1_Business.md", "| Process |\n|---|\n| Checkout |\n")],
            exported_at=fixed_timestamp,
        )
        assert [el.name for el in result.model.elements] == ["Checkout"]

    def test_bad_documents(self):
        with pytest.raises(InvalidDocumentError):
            export_to_archimate(None)
        with pytest.raises(InvalidDocumentError):
            export_to_archimate([42])

    def test_model_documentation(self, vault, fixed_timestamp):
        model = export_to_archimate(vault, name="Acme", exported_at=fixed_timestamp).model
        assert model.documentation == 'Exported from TOGAF vault "Acme" by archexport'
        assert model.metadata.exported_at == fixed_timestamp
        assert model.metadata.document_count == 5


class TestArchimateSummary:

    def test_counts(self, vault, fixed_timestamp):
        summary = export_to_archimate(vault, exported_at=fixed_timestamp).summary
        assert summary.total_elements == 16
        assert summary.total_views == 5
        assert sum(summary.by_layer.values()) == 16
        assert summary.by_type["Gap"] == 2
        assert summary.by_layer["Application"] == 5
        assert summary.source_files == sorted(summary.source_files)
        assert len(summary.source_files) == 5
        assert summary.orphaned_relationships == 0

    def test_orphans_are_counted(self):
        el = Element(id="e1", type=ElementType.NODE, name="A", layer=Layer.TECHNOLOGY)
        rel = Relationship(id="r1", type=RelationshipType.SERVING, source="e1", target="gone")
        assert archimate_summary(_model([el], [rel])).orphaned_relationships == 1

    def test_markdown(self, vault, fixed_timestamp):
        md = format_archimate_summary_markdown(export_to_archimate(vault, exported_at=fixed_timestamp).summary)
        assert md.startswith("## ArchiMate Export Summary")
        assert "| Elements | 16 |" in md
        assert "### By Layer" in md
        assert "- `B1_Business_Architecture.md`" in md
