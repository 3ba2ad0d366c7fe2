"""패키지 읽기/쓰기 통합 테스트"""

from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from docxml import Docx, IdAllocator
from docxml.exceptions import ArchiveError, DuplicateIdentifierError, MissingReferenceError
from docxml.wordml.base import NS
from docxml.wordml.components import (
    BookmarkRangeEnd,
    BookmarkRangeStart,
    Cell,
    Comment,
    CommentProperties,
    CommentRangeEnd,
    CommentRangeStart,
    Hyperlink,
    HyperlinkProperties,
    Image,
    ImageProperties,
    Paragraph,
    Row,
    Section,
    Table,
    Text,
    WatermarkText,
    WatermarkTextProperties,
)
from docxml.wordml.length import pt
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.custom_properties import CustomProperties, CustomPropertyType
from docxml.wordml.package.enums import ContentType
from docxml.wordml.package.files import UnhandledXmlFile
from docxml.wordml.package.numbering import AbstractNumbering, NumberingLevel
from docxml.wordml.package.styles import LatentStyle, StyleDefinition
from docxml.wordml.properties import (
    Border,
    CellProperties,
    NumberingReference,
    ParagraphProperties,
    SectionProperties,
    Shading,
    TableBorders,
    TableConditionalProperties,
    TableProperties,
    TextProperties,
)


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
DATE = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


def paragraph_text(paragraph: Paragraph) -> str:
    return "".join(
        child
        for run in paragraph.children
        if isinstance(run, Text)
        for child in run.children
        if isinstance(child, str)
    )


def content_type_of(archive: Archive, location: str) -> str:
    root = archive.read_xml("[Content_Types].xml")
    override = root.xpath(f"ct:Override[@PartName='/{location}']/@ContentType", namespaces=NS)
    return override[0] if override else None


def minimal_archive(extra_rels: str = "", files: Optional[Dict[str, bytes]] = None) -> Archive:
    """본문 관계에 extra_rels 를 추가한 최소 DOCX"""
    archive = Archive({
        "[Content_Types].xml": (
            '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
            '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
            '<Default Extension="xml" ContentType="application/xml"/>'
            f'<Override PartName="/word/document.xml" ContentType="{ContentType.MAIN_DOCUMENT.value}"/>'
            '</Types>'
        ).encode("utf-8"),
        "_rels/.rels": (
            '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
            '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>'
            '</Relationships>'
        ).encode("utf-8"),
        "word/document.xml": (
            f'<w:document xmlns:w="{NS["w"]}"><w:body><w:p><w:r><w:t>Kept</w:t></w:r></w:p></w:body></w:document>'
        ).encode("utf-8"),
        "word/_rels/document.xml.rels": (
            '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
            + extra_rels
            + '</Relationships>'
        ).encode("utf-8"),
    })
    for location, data in (files or {}).items():
        archive.add_binary_file(location, data)
    return archive


class TestEmptyDocument:
    def test_minimal_parts(self, docx):
        archive = docx.to_archive()
        assert sorted(archive.files()) == ["[Content_Types].xml", "_rels/.rels", "word/document.xml"]
        assert content_type_of(archive, "word/document.xml") == ContentType.MAIN_DOCUMENT.value

    def test_unused_parts_are_pruned(self, docx):
        document = docx.document
        document.ensure_styles()
        document.ensure_settings()
        document.ensure_numbering()
        document.ensure_comments()
        assert sorted(docx.to_archive().files()) == ["[Content_Types].xml", "_rels/.rels", "word/document.xml"]


class TestStyles:
    def test_one_custom_style(self, docx, xpath):
        style_id = docx.document.ensure_styles().add(StyleDefinition(name="My Style", type="character"))
        archive = docx.to_archive()
        styles = archive.read_xml("word/styles.xml")
        assert style_id == "MyStyle"
        assert xpath(styles, "w:style/@w:styleId") == ["MyStyle"]
        assert xpath(styles, "w:style/@w:type") == ["character"]
        assert content_type_of(archive, "word/styles.xml") == ContentType.STYLES.value
        assert "word/_rels/document.xml.rels" in archive.files()

    def test_duplicate_style(self, docx):
        styles = docx.document.ensure_styles()
        styles.add(StyleDefinition(id="Quote"))
        with pytest.raises(DuplicateIdentifierError):
            styles.add(StyleDefinition(id="Quote"))

    def test_referenced_styles_get_placeholders(self, docx, xpath):
        docx.document.set([
            Paragraph(ParagraphProperties(style="Heading1"), Text(TextProperties(style="Strong"), "x")),
        ])
        styles = docx.to_archive().read_xml("word/styles.xml")
        assert xpath(styles, "w:style/@w:styleId") == ["Heading1", "Strong"]
        assert xpath(styles, "w:style[@w:styleId='Strong']/@w:type") == ["character"]
        assert xpath(styles, "w:style[@w:styleId='Heading1']/w:basedOn/@w:val") == ["Normal"]

    def test_latent_styles_satisfy_references(self, docx, xpath):
        docx.document.ensure_styles().add_latent(LatentStyle(name="Heading1", ui_priority=9, q_format=True))
        docx.document.set([Paragraph(ParagraphProperties(style="Heading1"))])
        styles = docx.to_archive().read_xml("word/styles.xml")
        assert xpath(styles, "w:style") == []
        assert xpath(styles, "w:latentStyles/w:lsdException/@w:uiPriority") == ["9"]

    def test_round_trip(self, docx, reopen):
        docx.document.ensure_styles().add(StyleDefinition(
            id="Accent",
            name="Accent",
            type="character",
            text=TextProperties(color="FF0000", bold=True),
        ))
        style = reopen(docx).document.styles.get("Accent")
        assert style.type == "character"
        assert style.text.color == "FF0000"
        assert style.text.bold is True

    def test_table_style_conditions_round_trip(self, docx, reopen, xpath):
        docx.document.ensure_styles().add(StyleDefinition(
            id="Banded",
            type="table",
            table=TableProperties(borders=TableBorders(inside_h=Border(type="single", width=pt(0.5)))),
            table_conditions={
                "firstRow": TableConditionalProperties(cells=CellProperties(shading=Shading(fill="FF0000"))),
                "band1Horz": TableConditionalProperties(cells=CellProperties(shading=Shading(fill="EEEEEE"))),
            },
        ))
        archive = docx.to_archive()
        styles = archive.read_xml("word/styles.xml")
        style_node = styles.find("w:style", NS)
        assert [child.tag.split("}")[1] for child in style_node][-3:] == ["tblPr", "tblStylePr", "tblStylePr"]
        assert xpath(style_node, "w:tblStylePr/@w:type") == ["firstRow", "band1Horz"]

        style = Docx.from_archive(archive).document.styles.get("Banded")
        assert style.table_conditions["firstRow"].cells.shading.fill == "FF0000"
        assert style.table_conditions["band1Horz"].cells.shading.fill == "EEEEEE"
        assert style.table.borders.inside_h.type == "single"


class TestDocumentRoundTrip:
    def test_hello_world(self, allocator, reopen):
        docx = Docx.from_components(Paragraph(None, Text(None, "Hello world")), allocator)
        document = reopen(docx).document
        assert len(document.children) == 1
        assert paragraph_text(document.children[0]) == "Hello world"

    def test_sections(self, docx, reopen):
        docx.document.set([
            Section(SectionProperties(page_orientation="landscape"), Paragraph(None, Text(None, "one"))),
            Section(None, Paragraph(None, Text(None, "two")), Paragraph(None, Text(None, "three"))),
        ])
        first, second = reopen(docx).document.children
        assert isinstance(first, Section) and isinstance(second, Section)
        assert first.props.page_orientation == "landscape"
        assert [paragraph_text(p) for p in first.children] == ["one"]
        assert [paragraph_text(p) for p in second.children] == ["two", "three"]

    def test_merged_table(self, docx, reopen):
        docx.document.set([
            Table(
                None,
                Row(None, Cell(CellProperties(row_span=2), Paragraph()), Cell(CellProperties(col_span=2), Paragraph())),
                Row(None, Cell(None, Paragraph()), Cell(None, Paragraph())),
            ),
        ])
        table = reopen(docx).document.children[0]
        tall = table.children[0].children[0]
        assert tall.props.row_span == 2
        assert table.model.get_node_at_cell(0, 1) is tall
        assert table.model.column_count == 3
        assert table.model.is_rectangular()

    def test_bookmarks_registered_on_parse(self, docx, reopen):
        bookmark = docx.document.bookmarks.create()
        docx.document.set([
            Paragraph(None, BookmarkRangeStart(bookmark), Text(None, "mark"), BookmarkRangeEnd(bookmark)),
        ])
        document = reopen(docx).document
        assert bookmark.id in document.bookmarks
        assert document.bookmarks.create().id == bookmark.id + 1

    def test_clone_is_independent(self, docx):
        docx.document.set([Paragraph(None, Text(None, "original"))])
        copy = docx.clone(IdAllocator(seed=1))
        copy.document.set([Paragraph(None, Text(None, "changed"))])
        assert paragraph_text(docx.document.children[0]) == "original"

    def test_to_file(self, docx, tmp_path):
        path = docx.to_file(tmp_path / "out.docx")
        assert path.exists()
        assert Docx.from_archive(path).document is not None


class TestComments:
    def test_comment_round_trip(self, docx, reopen, xpath):
        comment_id = docx.document.ensure_comments().add(
            "Kim", "K", DATE, [Paragraph(None, Text(None, "Check this"))]
        )
        ref = CommentProperties(id=comment_id)
        docx.document.set([
            Paragraph(None, CommentRangeStart(ref), Text(None, "text"), CommentRangeEnd(ref), Comment(ref)),
        ])
        archive = docx.to_archive()
        assert content_type_of(archive, "word/comments.xml") == ContentType.COMMENTS.value
        assert xpath(archive.read_xml("word/styles.xml"), "w:style/@w:styleId") == ["CommentReference"]

        reopened = Docx.from_archive(archive, IdAllocator(seed=2)).document
        comment = reopened.comments.get(comment_id)
        assert (comment.author, comment.initials, comment.date) == ("Kim", "K", DATE)
        assert paragraph_text(comment.contents[0]) == "Check this"
        assert isinstance(reopened.children[0].children[-1], Comment)

    def test_dangling_comment_reference(self, docx):
        docx.document.set([Paragraph(None, Comment(CommentProperties(id=5)))])
        with pytest.raises(MissingReferenceError):
            docx.to_archive()


class TestNumbering:
    def test_numbering_round_trip(self, docx, reopen):
        numbering = docx.document.ensure_numbering()
        num_id = numbering.add(AbstractNumbering(
            type="singleLevel",
            levels=[NumberingLevel(start=1, format="decimal", text="%1.", alignment="left")],
        ))
        assert num_id == 1
        docx.document.set([Paragraph(ParagraphProperties(numbering=NumberingReference(id=num_id)), Text(None, "item"))])

        reopened = reopen(docx).document
        assert reopened.numbering.has(num_id)
        assert reopened.numbering.abstracts[0].levels[0].format == "decimal"
        assert reopened.children[0].props.numbering == NumberingReference(id=num_id, level=0)

    def test_unknown_abstract(self, docx):
        with pytest.raises(MissingReferenceError):
            docx.document.ensure_numbering().add(3)

    def test_independent_counters(self, docx):
        numbering = docx.document.ensure_numbering()
        first = numbering.add_abstract(AbstractNumbering())
        second = numbering.add_abstract(AbstractNumbering())
        assert (first, second) == (0, 1)
        assert [numbering.add(first), numbering.add(first)] == [1, 2]


class TestSettings:
    def test_track_changes(self, docx, xpath):
        docx.document.ensure_settings().is_track_changes_enabled = True
        archive = docx.to_archive()
        assert xpath(archive.read_xml("word/settings.xml"), "w:trackRevisions") != []
        assert Docx.from_archive(archive).document.settings.is_track_changes_enabled is True

    def test_unknown_setting(self, docx):
        with pytest.raises(KeyError):
            docx.document.ensure_settings().get("compatibility_mode")


class TestCustomProperties:
    def test_round_trip(self, docx, reopen):
        custom = docx.ensure_custom_properties()
        assert custom.add("Client", "ACME") == 2
        custom.add("Revision", 3)
        custom.add("Approved", True)
        custom.add("Due", DATE)

        archive = docx.to_archive()
        assert content_type_of(archive, "docProps/custom.xml") == ContentType.CUSTOM_PROPERTIES.value
        root = archive.read_xml("docProps/custom.xml")
        assert root.xpath("op:property/@pid", namespaces=NS) == ["2", "3", "4", "5"]
        assert root.xpath("op:property[@name='Revision']/vt:i4/text()", namespaces=NS) == ["3"]

        reopened = Docx.from_archive(archive).custom_properties
        assert isinstance(reopened, CustomProperties)
        assert [(prop.name, prop.type, prop.value) for prop in reopened.values()] == [
            ("Client", CustomPropertyType.TEXT, "ACME"),
            ("Revision", CustomPropertyType.NUMBER, 3),
            ("Approved", CustomPropertyType.BOOLEAN, True),
            ("Due", CustomPropertyType.DATE, DATE),
        ]

    def test_empty_part_is_pruned(self, docx):
        docx.ensure_custom_properties()
        assert "docProps/custom.xml" not in docx.to_archive().files()

    def test_duplicate_name(self, docx):
        custom = docx.ensure_custom_properties()
        custom.add("Client", "ACME")
        with pytest.raises(DuplicateIdentifierError):
            custom.add("Client", "Other")

    def test_type_mismatch(self, docx):
        with pytest.raises(ValueError):
            docx.ensure_custom_properties().add("Revision", "three", CustomPropertyType.NUMBER)


class TestHeadersAndFooters:
    def test_header_round_trip(self, docx, reopen):
        document = docx.document
        header_id = document.headers.add("word/header1.xml", Paragraph(None, Text(None, "Head")))
        footer_id = document.footers.add("word/footer1.xml", Paragraph(None, Text(None, "Foot")))
        document.set([Section(SectionProperties(headers=header_id, footers=footer_id), Paragraph())])

        archive = docx.to_archive()
        assert content_type_of(archive, "word/header1.xml") == ContentType.HEADER.value
        assert content_type_of(archive, "word/footer1.xml") == ContentType.FOOTER.value

        reopened = Docx.from_archive(archive).document
        headers = list(reopened.headers)
        assert len(headers) == 1
        assert paragraph_text(headers[0].children[0]) == "Head"
        assert reopened.children[0].props.headers.odd == header_id
        assert paragraph_text(reopened.footers.get(footer_id).children[0]) == "Foot"

    def test_watermark_in_header(self, docx, reopen):
        document = docx.document
        header_id = document.headers.add("word/header1.xml", [
            WatermarkText(WatermarkTextProperties(text="DRAFT", color="C0C0C0")),
            Paragraph(None, Text(None, "Head")),
        ])
        document.set([Section(SectionProperties(headers=header_id), Paragraph())])

        header = list(reopen(docx).document.headers)[0]
        watermark, paragraph = header.children
        assert isinstance(watermark, WatermarkText)
        assert watermark.props.text == "DRAFT"
        assert watermark.props.color == "C0C0C0"
        assert paragraph_text(paragraph) == "Head"

    def test_image_shared_with_body(self, docx, reopen):
        image = Image(ImageProperties(data=PNG, width=pt(20), height=pt(10)))
        document = docx.document
        header_id = document.headers.add("word/header1.xml", Paragraph(None, Text(None, image)))
        document.set([Section(SectionProperties(headers=header_id), Paragraph(None, Text(None, image)))])

        archive = docx.to_archive()
        media = [location for location in archive.files() if location.startswith("word/media/")]
        assert len(media) == 1

        reopened = Docx.from_archive(archive).document
        body_image = reopened.children[0].children[0].children[0].children[0]
        header_image = list(reopened.headers)[0].children[0].children[0].children[0]
        assert body_image.props.data == header_image.props.data == PNG
        assert body_image.location == header_image.location == media[0]


class TestMedia:
    def test_image(self, docx, reopen):
        docx.document.set([
            Paragraph(None, Text(None, Image(ImageProperties(data=PNG, width=pt(20), height=pt(10), alt="pic")))),
        ])
        archive = docx.to_archive()
        media = [location for location in archive.files() if location.startswith("word/media/")]
        assert len(media) == 1 and media[0].endswith(".png")
        defaults = archive.read_xml("[Content_Types].xml").xpath(
            "ct:Default[@Extension='png']/@ContentType", namespaces=NS
        )
        assert defaults == ["image/png"]

        image = reopen(docx).document.children[0].children[0].children[0]
        assert isinstance(image, Image)
        assert image.props.data == PNG
        assert image.props.alt == "pic"
        assert image.location == media[0]

    def test_hyperlink(self, docx, reopen):
        docx.document.set([
            Paragraph(None, Hyperlink(HyperlinkProperties(url="https://example.com"), Text(None, "site"))),
        ])
        link = reopen(docx).document.children[0].children[0]
        assert isinstance(link, Hyperlink)
        assert link.props.url == "https://example.com"


class TestUnhandledParts:
    def test_theme_is_preserved(self):
        theme = b'<a:theme xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" name="Office"/>'
        archive = minimal_archive(
            '<Relationship Id="rId9" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/theme" Target="theme/theme1.xml"/>',
            {"word/theme/theme1.xml": theme},
        )

        docx = Docx.from_archive(archive)
        part = docx.document.relationships.get_instance("rId9")
        assert isinstance(part, UnhandledXmlFile)

        out = docx.to_archive()
        assert out.read_binary("word/theme/theme1.xml") == theme
        assert content_type_of(out, "word/theme/theme1.xml") == ContentType.THEME.value
        assert paragraph_text(Docx.from_archive(out).document.children[0]) == "Kept"


class TestArchiveErrors:
    def test_not_a_zip(self):
        with pytest.raises(ArchiveError):
            Docx.from_archive(b"not a zip file")

    def test_missing_file(self):
        with pytest.raises(ArchiveError, match="word/missing.xml"):
            Archive().read_binary("word/missing.xml")

    def test_missing_content_types(self):
        with pytest.raises(ArchiveError):
            Docx.from_archive(Archive({"_rels/.rels": b"<Relationships/>"}))
