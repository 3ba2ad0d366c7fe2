"""파트 간 관계"""

import pytest

from docxml.exceptions import MissingReferenceError, UnhandledRelationshipError
from docxml.wordml.base import NS
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import RelationshipType
from docxml.wordml.package.files import BinaryFile
from docxml.wordml.package.relationships import Relationships, relative_target, resolve_target
from docxml.wordml.package.styles import StyleDefinition, Styles


@pytest.fixture
def relationships():
    return Relationships("word/_rels/document.xml.rels", allocator=IdAllocator(seed=7))


def rels_xml(*entries: str) -> bytes:
    return (
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        + "".join(entries)
        + "</Relationships>"
    ).encode("utf-8")


class TestTargets:
    @pytest.mark.parametrize(
        "location, target, expected",
        [
            ("_rels/.rels", "word/document.xml", "word/document.xml"),
            ("word/_rels/document.xml.rels", "styles.xml", "word/styles.xml"),
            ("word/_rels/document.xml.rels", "media/a.png", "word/media/a.png"),
            ("word/_rels/document.xml.rels", "/word/theme/theme1.xml", "word/theme/theme1.xml"),
            ("word/_rels/document.xml.rels", "../customXml/item1.xml", "customXml/item1.xml"),
        ],
    )
    def test_resolve(self, location, target, expected):
        assert resolve_target(location, target) == expected

    def test_relative(self):
        assert relative_target("_rels/.rels", "word/document.xml") == "word/document.xml"
        assert relative_target("word/_rels/document.xml.rels", "word/media/a.png") == "media/a.png"


class TestAdd:
    def test_unique_ids(self, relationships):
        ids = {
            relationships.add(RelationshipType.IMAGE, BinaryFile(f"word/media/{i}.png", b"x"))
            for i in range(20)
        }
        assert len(ids) == 20
        assert all(rid.startswith("rId") for rid in ids)

    def test_seeded_ids_are_reproducible(self):
        first = Relationships("_rels/.rels", allocator=IdAllocator(seed=3))
        second = Relationships("_rels/.rels", allocator=IdAllocator(seed=3))
        assert first.add(RelationshipType.HYPERLINK, "https://a.example") == second.add(
            RelationshipType.HYPERLINK, "https://a.example"
        )

    def test_ensure_relationship_is_idempotent(self, relationships):
        first = relationships.ensure_relationship(RelationshipType.STYLES, lambda: Styles(allocator=relationships.allocator))
        second = relationships.ensure_relationship(RelationshipType.STYLES, lambda: pytest.fail("factory called twice"))
        assert first is second
        assert len(relationships) == 1

    def test_get_target(self, relationships):
        rid = relationships.add(RelationshipType.HYPERLINK, "https://example.com")
        assert relationships.get_target(rid) == "https://example.com"
        with pytest.raises(MissingReferenceError):
            relationships.get_target("rIdNope")


class TestSerialization:
    def test_empty_parts_are_pruned(self, relationships, xpath):
        styles = relationships.ensure_relationship(RelationshipType.STYLES, lambda: Styles())
        assert relationships.is_empty()
        assert relationships.get_related() == [relationships]
        assert xpath(relationships.to_node(), "rel:Relationship") == []

        styles.add(StyleDefinition(name="Custom"))
        assert not relationships.is_empty()
        assert relationships.get_related() == [relationships, styles]

    def test_targets_written_relative(self, relationships, xpath):
        relationships.add(RelationshipType.IMAGE, BinaryFile("word/media/a.png", b"x"))
        relationships.add(RelationshipType.HYPERLINK, "https://example.com")
        root = relationships.to_node()
        assert xpath(root, "rel:Relationship/@Target") == ["media/a.png", "https://example.com"]
        assert xpath(root, "rel:Relationship/@TargetMode") == ["External"]


class TestFromArchive:
    def test_loads_parts(self):
        archive = Archive({
            "word/_rels/document.xml.rels": rels_xml(
                '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/pic.png"/>',
                '<Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="https://example.com" TargetMode="External"/>',
            ),
            "word/media/pic.png": b"\x89PNG\r\n\x1a\n",
        })
        relationships = Relationships.from_archive(archive, "word/_rels/document.xml.rels", IdAllocator(seed=1))
        assert relationships.get_target("rId1") == "word/media/pic.png"
        assert isinstance(relationships.get_instance("rId1"), BinaryFile)
        assert relationships.get_meta("rId2").is_external
        assert relationships.get_instance("rId2") is None

    def test_missing_target_is_dropped(self):
        archive = Archive({
            "word/_rels/document.xml.rels": rels_xml(
                '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/gone.png"/>',
            ),
        })
        relationships = Relationships.from_archive(archive, "word/_rels/document.xml.rels")
        assert len(relationships) == 0

    def test_unknown_type(self):
        archive = Archive({
            "word/_rels/document.xml.rels": rels_xml(
                '<Relationship Id="rId1" Type="http://example.com/unknown" Target="x.xml"/>',
            ),
            "word/x.xml": b"<x/>",
        })
        with pytest.raises(UnhandledRelationshipError):
            Relationships.from_archive(archive, "word/_rels/document.xml.rels")

    def test_known_type_without_handler(self):
        archive = Archive({
            "word/_rels/document.xml.rels": rels_xml(
                '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/attachedTemplate" Target="tpl.dotx"/>',
            ),
            "word/tpl.dotx": b"PK",
        })
        with pytest.raises(UnhandledRelationshipError):
            Relationships.from_archive(archive, "word/_rels/document.xml.rels")


def test_namespace_of_written_relationships(relationships):
    relationships.add(RelationshipType.HYPERLINK, "https://example.com")
    assert relationships.to_node().tag == f"{{{NS['rel']}}}Relationships"
