"""본문 파트 (word/document.xml)

스타일, 설정, 번호 매기기, 주석 파트는 본문 관계로 연결된다. 조회용
속성(styles, settings, ...)은 관계가 없으면 None 을 돌려주고, 파트를 만드는
것은 ensure_*() 뿐이다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Type, Union

from lxml import etree

from docxml.wordml.base import NS, new_element, sub_element
from docxml.wordml.component import Child, Component, ComponentContext
from docxml.wordml.components.bookmark import BookmarkRangeStart
from docxml.wordml.components.section import Section
from docxml.wordml.identifiers import Bookmarks, IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.comments import Comments
from docxml.wordml.package.enums import ContentType, PartLocation, RelationshipType
from docxml.wordml.package.files import XmlFileWithRelationships, relationships_location
from docxml.wordml.package.header_footer import FooterXml, HeaderXml, _HeaderFooterXml
from docxml.wordml.package.numbering import Numbering
from docxml.wordml.package.settings import Settings
from docxml.wordml.package.styles import Styles

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)

DOCUMENT_CHILDREN = ("Section", "Table", "Paragraph")
BODY_CHILDREN = ("Table", "Paragraph")


class HeaderFooterCollection:
    """document.headers / document.footers"""

    def __init__(
        self,
        document: "DocumentXml",
        part_class: Type[_HeaderFooterXml],
        rel_type: RelationshipType,
    ):
        self._document = document
        self._part_class = part_class
        self._rel_type = rel_type

    def add(self, location: str, children: Union[Component, Iterable[Component]]) -> str:
        """파트를 만들어 본문 관계에 추가하고 관계 ID 반환 (구역 속성에서 참조)"""
        part = self._part_class(location, allocator=self._document.allocator)
        part.set(children)
        return self._document.relationships.add(self._rel_type, part)

    def __iter__(self) -> Iterator[_HeaderFooterXml]:
        for part in self._document.relationships.filter_instances(lambda meta: meta.type == self._rel_type):
            yield part

    def get(self, rid: str) -> Optional[_HeaderFooterXml]:
        part = self._document.relationships.get_instance(rid)
        return part if isinstance(part, self._part_class) else None


class DocumentXml(XmlFileWithRelationships):
    """본문"""

    content_type = ContentType.MAIN_DOCUMENT.value

    def __init__(
        self,
        location: str = PartLocation.DOCUMENT.value,
        relationships: Optional["Relationships"] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        super().__init__(location, relationships, allocator)
        self.children: List[Child] = []
        self.bookmarks = Bookmarks()
        self.headers = HeaderFooterCollection(self, HeaderXml, RelationshipType.HEADER)
        self.footers = HeaderFooterCollection(self, FooterXml, RelationshipType.FOOTER)

    def set(self, children: Union[Component, Iterable[Component]]) -> None:
        if isinstance(children, Component):
            children = [children]
        self.children = list(children)

    def append(self, *children: Component) -> None:
        self.children.extend(children)

    def iter_components(self) -> Iterator[Component]:
        for child in self.children:
            if isinstance(child, Component):
                yield from child.iter_components()

    # ============================================================
    # 연결 파트
    # ============================================================

    def _find(self, rel_type: RelationshipType):
        return self.relationships.find_instance(lambda meta: meta.type == rel_type)

    @property
    def styles(self) -> Optional[Styles]:
        return self._find(RelationshipType.STYLES)

    @property
    def settings(self) -> Optional[Settings]:
        return self._find(RelationshipType.SETTINGS)

    @property
    def numbering(self) -> Optional[Numbering]:
        return self._find(RelationshipType.NUMBERING)

    @property
    def comments(self) -> Optional[Comments]:
        return self._find(RelationshipType.COMMENTS)

    def ensure_styles(self) -> Styles:
        return self.relationships.ensure_relationship(
            RelationshipType.STYLES,
            lambda: Styles(PartLocation.STYLES.value, self.allocator),
        )

    def ensure_settings(self) -> Settings:
        return self.relationships.ensure_relationship(
            RelationshipType.SETTINGS,
            lambda: Settings(PartLocation.SETTINGS.value, allocator=self.allocator),
        )

    def ensure_numbering(self) -> Numbering:
        return self.relationships.ensure_relationship(
            RelationshipType.NUMBERING,
            lambda: Numbering(PartLocation.NUMBERING.value),
        )

    def ensure_comments(self) -> Comments:
        return self.relationships.ensure_relationship(
            RelationshipType.COMMENTS,
            lambda: Comments(PartLocation.COMMENTS.value, allocator=self.allocator),
        )

    # ============================================================
    # 직렬화
    # ============================================================

    def to_node(self) -> etree._Element:
        root = new_element("w", "document")
        body = sub_element(root, "w", "body")
        for child in self.children:
            rendered = child.to_node((self,))
            for node in rendered if isinstance(rendered, list) else [rendered]:
                body.append(node)
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str, allocator: Optional[IdAllocator] = None) -> "DocumentXml":
        from docxml.wordml.package.relationships import Relationships

        rels_location = relationships_location(location)
        relationships = (
            Relationships.from_archive(archive, rels_location, allocator)
            if archive.has_file(rels_location)
            else None
        )
        document = cls(location, relationships, allocator)
        context = ComponentContext(archive=archive, relationships=document.relationships)

        body = archive.read_xml(location).find("w:body", NS)
        if body is None:
            logger.debug("No w:body in %s", location)
            return document

        sections = body.xpath("w:p/w:pPr/w:sectPr | w:sectPr", namespaces=NS)
        if not sections:
            document.set(context.registry.create_children(BODY_CHILDREN, list(body), context))
            document._register_bookmarks()
            return document

        children: List[Child] = [Section.from_node(node, context) for node in sections]
        last = sections[-1]
        if last.getparent() is not body:
            # 마지막 구역 끝 문단 뒤에 남은 요소
            paragraph = last.getparent().getparent()
            children.extend(context.registry.create_children(
                BODY_CHILDREN, list(paragraph.itersiblings()), context
            ))
        document.set(children)
        document._register_bookmarks()
        return document

    def _register_bookmarks(self) -> None:
        for component in self.iter_components():
            if isinstance(component, BookmarkRangeStart):
                self.bookmarks.register_identifier(component.props.id, component.props.name)
