"""컴포넌트 직렬화와 파싱"""

from datetime import datetime, timezone

import pytest

from docxml.exceptions import MissingAncestorError, MissingReferenceError, StructureError
from docxml.wordml.base import NS
from docxml.wordml.components import (
    BookmarkRangeEnd,
    BookmarkRangeStart,
    Break,
    BreakProperties,
    Cell,
    Comment,
    CommentProperties,
    Field,
    FieldProperties,
    FieldRangeEnd,
    FieldRangeInstruction,
    FieldRangeSeparator,
    FieldRangeStart,
    Hyperlink,
    HyperlinkProperties,
    Image,
    ImageProperties,
    NonBreakingHyphen,
    Paragraph,
    Row,
    Section,
    Symbol,
    Tab,
    Table,
    Text,
    TextAddition,
    TextDeletion,
    WatermarkText,
    WatermarkTextProperties,
)
from docxml.wordml.identifiers import Bookmarks, IdAllocator
from docxml.wordml.length import cm, pt
from docxml.wordml.package.document import DocumentXml
from docxml.wordml.package.header_footer import HeaderXml
from docxml.wordml.package.enums import RelationshipType
from docxml.wordml.package.relationships import Relationships
from docxml.wordml.properties import (
    ChangeInformation,
    ParagraphProperties,
    SectionProperties,
    TextProperties,
)


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>'
CHANGE = ChangeInformation(id=7, author="Kim", date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))


@pytest.fixture
def relationships():
    return Relationships("word/_rels/document.xml.rels", allocator=IdAllocator(seed=5))


class TestText:
    def test_strings_become_w_t(self, xpath):
        run = Text(TextProperties(bold=True), "Hello ", Break(), "world").to_node()
        assert xpath(run, "w:rPr/w:b") != []
        assert xpath(run, "w:t/text()") == ["Hello ", "world"]
        assert [child.tag.split("}")[1] for child in run] == ["rPr", "t", "br", "t"]

    def test_no_empty_run_properties(self, xpath):
        assert xpath(Text(None, "x").to_node(), "w:rPr") == []

    def test_inline_children(self, parse_xml):
        text = Text.from_node(parse_xml(
            '<w:r><w:t>a</w:t><w:tab/><w:br w:type="page"/><w:noBreakHyphen/>'
            '<w:sym w:font="Wingdings" w:char="F0E0"/></w:r>'
        ))
        assert text.children[0] == "a"
        assert isinstance(text.children[1], Tab)
        assert text.children[2].props == BreakProperties(type="page")
        assert isinstance(text.children[3], NonBreakingHyphen)
        assert isinstance(text.children[4], Symbol)
        assert text.children[4].props.char == "F0E0"

    def test_unknown_children_are_skipped(self, parse_xml):
        text = Text.from_node(parse_xml("<w:r><w:lastRenderedPageBreak/><w:t>a</w:t></w:r>"))
        assert text.children == ["a"]


class TestTrackedChanges:
    def test_deleted_text_uses_del_text(self, xpath):
        node = TextDeletion(CHANGE, Text(None, "gone")).to_node()
        assert xpath(node, "@w:author") == ["Kim"]
        assert xpath(node, "@w:id") == ["7"]
        assert xpath(node, "w:r/w:delText/text()") == ["gone"]
        assert xpath(node, "w:r/w:t") == []

    def test_added_text_uses_t(self, xpath):
        node = TextAddition(CHANGE, Text(None, "new")).to_node()
        assert xpath(node, "w:r/w:t/text()") == ["new"]

    def test_deletion_of_addition(self, xpath):
        node = TextDeletion(CHANGE, TextAddition(CHANGE, Text(None, "both"))).to_node()
        assert xpath(node, "w:ins/w:r/w:delText/text()") == ["both"]
        parsed = TextDeletion.from_node(node)
        assert isinstance(parsed.children[0], TextAddition)
        assert parsed.props == CHANGE


class TestParagraph:
    def test_properties_and_children(self, xpath):
        p = Paragraph(
            ParagraphProperties(style="Heading1", alignment="center"),
            Text(None, "Title"),
        ).to_node()
        assert xpath(p, "w:pPr/w:pStyle/@w:val") == ["Heading1"]
        assert xpath(p, "w:pPr/w:jc/@w:val") == ["center"]
        assert xpath(p, "string(w:r)") == "Title"

    def test_parse_mixed_children(self, parse_xml):
        paragraph = Paragraph.from_node(parse_xml(
            '<w:p><w:pPr><w:pStyle w:val="Quote"/></w:pPr>'
            '<w:bookmarkStart w:id="1" w:name="here"/>'
            '<w:r><w:t>a</w:t></w:r>'
            '<w:ins w:id="2" w:author="Lee" w:date="2024-01-01T00:00:00Z"><w:r><w:t>b</w:t></w:r></w:ins>'
            '<w:r><w:rPr><w:rStyle w:val="CommentReference"/></w:rPr><w:commentReference w:id="0"/></w:r>'
            '<w:bookmarkEnd w:id="1"/>'
            '</w:p>'
        ))
        assert paragraph.props.style == "Quote"
        assert [type(child).__name__ for child in paragraph.children] == [
            "BookmarkRangeStart", "Text", "TextAddition", "Comment", "BookmarkRangeEnd",
        ]
        assert paragraph.children[0].props.name == "here"
        assert paragraph.children[3].props == CommentProperties(id=0)


class TestSection:
    def test_sections_in_body(self, xpath):
        document = DocumentXml()
        document.set([
            Section(SectionProperties(page_width=cm(21)), Paragraph(None, Text(None, "one"))),
            Section(SectionProperties(page_orientation="landscape"), Paragraph(None, Text(None, "two"))),
        ])
        body = document.to_node()[0]
        assert xpath(body, "string(w:p[1])") == "one"
        assert xpath(body, "w:p[1]/w:pPr/w:sectPr/w:pgSz/@w:w") == ["11906"]
        # 마지막 구역은 본문 끝
        assert body[-1].tag.endswith("}sectPr")
        assert xpath(body, "w:sectPr/w:pgSz/@w:orient") == ["landscape"]
        assert xpath(body, "w:p[2]/w:pPr/w:sectPr") == []

    def test_section_ending_in_table_gets_paragraph(self, xpath):
        document = DocumentXml()
        table = Table(None, Row(None, Cell()))
        document.set([Section(None, table), Section(None, Paragraph())])
        body = document.to_node()[0]
        assert xpath(body, "w:tbl/following-sibling::w:p[1]/w:pPr/w:sectPr") != []

    def test_section_requires_parent(self):
        with pytest.raises(MissingAncestorError):
            Section(None, Paragraph()).to_node()

    def test_header_references(self, xpath):
        document = DocumentXml()
        document.set([Section(SectionProperties(headers="rIdHead"), Paragraph())])
        sectpr = xpath(document.to_node(), "w:body/w:sectPr")[0]
        assert xpath(sectpr, "w:headerReference/@w:type") == ["first", "even", "default"]
        assert set(xpath(sectpr, "w:headerReference/@r:id")) == {"rIdHead"}


class TestField:
    def test_simple_field(self, xpath):
        node = Field(FieldProperties(instruction="PAGE", is_dirty=True), Text(None, "1")).to_node()
        assert xpath(node, "@w:instr") == ["PAGE"]
        assert xpath(node, "@w:dirty") == ["1"]
        assert Field.from_node(node).props == FieldProperties(instruction="PAGE", is_dirty=True)

    def test_complex_field_characters(self, xpath):
        run = Text(
            None,
            FieldRangeStart(),
            FieldRangeInstruction(None, " DATE "),
            FieldRangeSeparator(),
            "today",
            FieldRangeEnd(),
        ).to_node()
        assert xpath(run, "w:fldChar/@w:fldCharType") == ["begin", "separate", "end"]
        assert xpath(run, "w:instrText/text()") == [" DATE "]

        parsed = Text.from_node(run)
        assert [type(child).__name__ if not isinstance(child, str) else child for child in parsed.children] == [
            "FieldRangeStart", "FieldRangeInstruction", "FieldRangeSeparator", "today", "FieldRangeEnd",
        ]


class TestHyperlink:
    def test_external_link_needs_relationship(self):
        with pytest.raises(StructureError):
            Hyperlink(HyperlinkProperties(url="https://example.com"), Text(None, "x")).to_node()

    def test_external_link(self, relationships, xpath):
        link = Hyperlink(HyperlinkProperties(url="https://example.com"), Text(None, "x"))
        link.ensure_relationship(relationships)
        node = link.to_node()
        assert xpath(node, "@r:id") == [link.relationship_id]
        meta = relationships.get_meta(link.relationship_id)
        assert meta.is_external
        assert meta.type == RelationshipType.HYPERLINK

    def test_same_url_shares_relationship(self, relationships):
        first = Hyperlink(HyperlinkProperties(url="https://example.com"))
        second = Hyperlink(HyperlinkProperties(url="https://example.com"))
        first.ensure_relationship(relationships)
        second.ensure_relationship(relationships)
        assert first.relationship_id == second.relationship_id
        assert len(relationships) == 1

    def test_one_instance_in_two_parts(self, xpath):
        document = DocumentXml()
        header = HeaderXml("word/header1.xml", allocator=document.allocator)
        header.relationships.add(RelationshipType.HYPERLINK, "https://other.example")
        link = Hyperlink(HyperlinkProperties(url="https://example.com"))
        link.ensure_relationship(document.relationships)
        link.ensure_relationship(header.relationships)
        for part in (document, header):
            (rid,) = xpath(link.to_node((Paragraph(), part)), "@r:id")
            assert part.relationships.get_target(rid) == "https://example.com"

    def test_bookmark_link(self, xpath):
        bookmark = Bookmarks().create()
        node = Hyperlink(HyperlinkProperties(bookmark=bookmark), Text(None, "jump")).to_node()
        assert xpath(node, "@w:anchor") == [bookmark.name]
        assert xpath(node, "@r:id") == []


class TestBookmark:
    def test_range(self, xpath):
        bookmarks = Bookmarks()
        bookmark = bookmarks.create()
        start = BookmarkRangeStart(bookmark).to_node()
        end = BookmarkRangeEnd(bookmark).to_node()
        assert xpath(start, "@w:id") == ["0"]
        assert xpath(start, "@w:name") == ["__docxml_bookmark_0"]
        assert xpath(end, "@w:name") == []
        assert bookmarks.create().id == 1


class TestImage:
    def test_requires_document_context(self):
        with pytest.raises(StructureError):
            Image(ImageProperties(data=PNG, width=pt(10), height=pt(20))).to_node()

    def test_drawing(self, relationships, xpath):
        image = Image(ImageProperties(data=PNG, width=pt(10), height=pt(20), title="logo", alt="Logo"))
        image.ensure_relationship(relationships)
        drawing = image.to_node()
        assert image.location.startswith("word/media/") and image.location.endswith(".png")
        assert xpath(drawing, "wp:inline/wp:extent/@cx") == ["127000"]
        assert xpath(drawing, "wp:inline/wp:extent/@cy") == ["254000"]
        assert xpath(drawing, "wp:inline/wp:docPr/@descr") == ["Logo"]
        assert xpath(drawing, ".//a:blip/@r:embed") == [image.relationship_id]
        assert xpath(drawing, ".//asvg:svgBlip") == []
        assert relationships.get_instance(image.relationship_id).data == PNG

    def test_relationship_registered_once(self, relationships):
        image = Image(ImageProperties(data=PNG, width=pt(1), height=pt(1)))
        image.ensure_relationship(relationships)
        first = (image.relationship_id, image.drawing_id)
        image.ensure_relationship(relationships)
        assert (image.relationship_id, image.drawing_id) == first
        assert len(relationships) == 1

    def test_svg_with_fallback(self, relationships, xpath):
        image = Image(ImageProperties(data=PNG, width=pt(1), height=pt(1), svg=SVG))
        image.ensure_relationship(relationships)
        drawing = image.to_node()
        assert xpath(drawing, ".//asvg:svgBlip/@r:embed") == [image.svg_relationship_id]
        assert image.svg_location.endswith(".svg")
        assert relationships.get_instance(image.svg_relationship_id).get_content_type() == "image/svg+xml"

    def test_one_instance_in_two_parts(self, xpath):
        document = DocumentXml()
        header = HeaderXml("word/header1.xml", allocator=document.allocator)
        image = Image(ImageProperties(data=PNG, width=pt(1), height=pt(1)))
        image.ensure_relationship(document.relationships)
        image.ensure_relationship(header.relationships)

        for part in (document, header):
            drawing = image.to_node((Text(), Paragraph(), part))
            (embed,) = xpath(drawing, ".//a:blip/@r:embed")
            assert part.relationships.get_target(embed) == image.location

        with pytest.raises(StructureError):
            image.to_node((HeaderXml("word/header2.xml"),))


class TestComment:
    def test_unknown_comment(self):
        document = DocumentXml()
        with pytest.raises(MissingReferenceError):
            Comment(CommentProperties(id=3)).to_node((document,))

    def test_reference_run(self, xpath):
        document = DocumentXml()
        comment_id = document.ensure_comments().add("Kim", "K", CHANGE.date, [Paragraph(None, Text(None, "note"))])
        run = Comment(CommentProperties(id=comment_id)).to_node((document,))
        assert xpath(run, "w:rPr/w:rStyle/@w:val") == ["CommentReference"]
        assert xpath(run, "w:commentReference/@w:id") == [str(comment_id)]


class TestWatermarkText:
    def test_shape(self, xpath):
        node = WatermarkText(WatermarkTextProperties(text="DRAFT", color="FF0000")).to_node()
        ns = {"w": NS["w"], "v": NS["v"], "o": NS["o"]}
        (shape,) = node.xpath("w:r/w:pict/v:shape", namespaces=ns)
        assert shape.get("fillcolor") == "#FF0000"
        assert shape.get(f"{{{NS['o']}}}allowincell") == "f"
        assert "mso-position-horizontal:center" in shape.get("style")
        assert node.xpath("w:r/w:pict/v:shape/v:textpath/@string", namespaces=ns) == ["DRAFT"]

    def test_round_trip(self):
        props = WatermarkTextProperties(
            text="CONFIDENTIAL",
            horizontal_align="left",
            vertical_align="top",
            min_font_size=pt(36),
            box_width=pt(400),
            box_height=pt(100),
            color="C0C0C0",
        )
        node = WatermarkText(props).to_node()
        assert WatermarkText.matches_node(node)
        assert WatermarkText.from_node(node).props == props

    def test_plain_paragraph_is_not_a_watermark(self, parse_xml):
        assert not WatermarkText.matches_node(parse_xml("<w:p><w:r><w:t>x</w:t></w:r></w:p>"))
