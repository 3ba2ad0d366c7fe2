"""머리글/바닥글 파트 (word/header{N}.xml, word/footer{N}.xml)"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Iterable, Iterator, List, Optional, Tuple, Union

from lxml import etree

from docxml.wordml.base import new_element
from docxml.wordml.component import Child, Component, ComponentContext
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType
from docxml.wordml.package.files import XmlFileWithRelationships, relationships_location

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


HEADER_FOOTER_CHILDREN = ("Table", "Paragraph")
# 워터마크 문단이 일반 문단보다 먼저 매칭되어야 한다
HEADER_CHILDREN = ("WatermarkText",) + HEADER_FOOTER_CHILDREN


class _HeaderFooterXml(XmlFileWithRelationships):
    """문단/표를 담는 머리글/바닥글 공통 구현"""

    root_local: ClassVar[str] = ""
    child_names: ClassVar[Tuple[str, ...]] = HEADER_FOOTER_CHILDREN

    def __init__(
        self,
        location: str,
        relationships: Optional["Relationships"] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        super().__init__(location, relationships, allocator)
        self.children: List[Child] = []

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

    def to_node(self) -> etree._Element:
        root = new_element("w", self.root_local)
        for child in self.children:
            rendered = child.to_node((self,))
            for node in rendered if isinstance(rendered, list) else [rendered]:
                root.append(node)
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str, allocator: Optional[IdAllocator] = None):
        from docxml.wordml.package.relationships import Relationships

        rels_location = relationships_location(location)
        relationships = (
            Relationships.from_archive(archive, rels_location, allocator)
            if archive.has_file(rels_location)
            else None
        )
        part = cls(location, relationships, allocator)
        context = ComponentContext(archive=archive, relationships=part.relationships)
        part.set(context.registry.create_children(
            cls.child_names,
            list(archive.read_xml(location)),
            context,
        ))
        return part


class HeaderXml(_HeaderFooterXml):
    content_type = ContentType.HEADER.value
    root_local = "hdr"
    child_names = HEADER_CHILDREN


class FooterXml(_HeaderFooterXml):
    content_type = ContentType.FOOTER.value
    root_local = "ftr"
