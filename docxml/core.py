"""
Docx 패키지 메인 클래스
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from docxml.wordml.component import Component
from docxml.wordml.components import Comment, Paragraph, Table, Text
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.content_types import ContentTypes
from docxml.wordml.package.custom_properties import CustomProperties
from docxml.wordml.package.document import DocumentXml
from docxml.wordml.package.enums import PartLocation, RelationshipType
from docxml.wordml.package.files import BinaryFile, PackagePart, XmlFileWithRelationships
from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)


def style_references(component: Component) -> List[Tuple[str, str]]:
    """컴포넌트가 참조하는 (스타일 ID, 스타일 타입) 목록"""
    props = component.props
    if isinstance(component, Paragraph):
        refs = [(props.style, "paragraph")] if props.style else []
        if props.pilcrow is not None and props.pilcrow.style:
            refs.append((props.pilcrow.style, "character"))
        return refs
    if isinstance(component, Text):
        return [(props.style, "character")] if props.style else []
    if isinstance(component, Table):
        return [(props.style, "table")] if props.style else []
    if isinstance(component, Comment):
        return [("CommentReference", "character")]
    return []


class Docx:
    """DOCX 패키지

    루트 관계(_rels/.rels)와 콘텐츠 타입을 소유하고, officeDocument 관계로
    본문 파트를 찾는다. ID 는 allocator 에서 발급한다.
    """

    def __init__(
        self,
        content_types: Optional[ContentTypes] = None,
        relationships: Optional[Relationships] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        """
        Args:
            content_types: [Content_Types].xml (없으면 기본값)
            relationships: 루트 관계 (없으면 빈 목록)
            allocator: ID 발급기 (테스트에서는 seed 고정)
        """
        self.allocator = allocator or IdAllocator()
        self.content_types = content_types or ContentTypes()
        if relationships is None:
            relationships = Relationships(PartLocation.ROOT_RELATIONSHIPS.value, allocator=self.allocator)
        self.relationships = relationships

    # ============================================================
    # 생성
    # ============================================================

    @classmethod
    def from_nothing(cls, allocator: Optional[IdAllocator] = None) -> "Docx":
        """본문 파트만 있는 빈 패키지"""
        docx = cls(allocator=allocator)
        docx.ensure_document()
        return docx

    @classmethod
    def from_components(
        cls,
        children: Union[Component, Iterable[Component]],
        allocator: Optional[IdAllocator] = None,
    ) -> "Docx":
        docx = cls.from_nothing(allocator)
        docx.ensure_document().set(children)
        return docx

    @classmethod
    def from_archive(
        cls,
        source: Union[Archive, bytes, str, Path],
        allocator: Optional[IdAllocator] = None,
    ) -> "Docx":
        """
        DOCX 읽기

        Args:
            source: Archive, ZIP 바이트 또는 파일 경로
            allocator: ID 발급기

        Returns:
            officeDocument 에서 도달 가능한 모든 파트를 읽은 Docx
        """
        if isinstance(source, Archive):
            archive = source
        elif isinstance(source, bytes):
            archive = Archive.from_bytes(source)
        else:
            archive = Archive.from_file(source)

        allocator = allocator or IdAllocator()
        content_types = ContentTypes.from_archive(archive)
        relationships = Relationships.from_archive(archive, PartLocation.ROOT_RELATIONSHIPS.value, allocator)
        docx = cls(content_types, relationships, allocator)
        if docx.document is None:
            logger.warning("Package has no officeDocument relationship")
        return docx

    # ============================================================
    # 본문
    # ============================================================

    @property
    def document(self) -> Optional[DocumentXml]:
        return self.relationships.find_instance(lambda meta: meta.type == RelationshipType.OFFICE_DOCUMENT)

    def ensure_document(self) -> DocumentXml:
        return self.relationships.ensure_relationship(
            RelationshipType.OFFICE_DOCUMENT,
            lambda: DocumentXml(PartLocation.DOCUMENT.value, allocator=self.allocator),
        )

    @property
    def custom_properties(self) -> Optional[CustomProperties]:
        return self.relationships.find_instance(lambda meta: meta.type == RelationshipType.CUSTOM_PROPERTIES)

    def ensure_custom_properties(self) -> CustomProperties:
        """docProps/custom.xml (속성이 없으면 저장할 때 생략)"""
        return self.relationships.ensure_relationship(
            RelationshipType.CUSTOM_PROPERTIES,
            lambda: CustomProperties(PartLocation.CUSTOM_PROPERTIES.value),
        )

    def _component_parts(self, document: DocumentXml) -> Iterator[XmlFileWithRelationships]:
        """컴포넌트를 가진 파트 (본문, 머리글, 바닥글, 주석)"""
        yield document
        yield from document.headers
        yield from document.footers
        if document.comments is not None:
            yield document.comments

    def _prepare(self, document: DocumentXml) -> None:
        """직렬화 전 관계 등록과 스타일 자리표시자 추가"""
        for part in list(self._component_parts(document)):
            for component in part.iter_components():
                component.ensure_relationship(part.relationships)
                for style_id, style_type in style_references(component):
                    styles = document.styles
                    if styles is None or not styles.has_style(style_id):
                        document.ensure_styles().ensure_style(style_id, style_type)

    # ============================================================
    # 저장
    # ============================================================

    def to_archive(self) -> Archive:
        """모든 관련 파트와 매니페스트를 담은 Archive"""
        self._prepare(self.ensure_document())

        related: List[PackagePart] = self.relationships.get_related()
        content_types = ContentTypes(defaults=self.content_types.defaults)
        archive = Archive()
        for part in related:
            part.add_to_archive(archive)
            logger.debug("Wrote %s (%s)", part.location, part.get_content_type())
            if isinstance(part, Relationships):
                continue
            if isinstance(part, BinaryFile):
                content_types.add_default(part.extension, part.get_content_type())
            elif not content_types.is_default(part.location, part.get_content_type()):
                content_types.add_override(part.location, part.get_content_type())

        content_types.add_to_archive(archive)
        self.content_types = content_types
        logger.debug("Wrote %d parts", len(related) + 1)
        return archive

    def to_bytes(self) -> bytes:
        return self.to_archive().to_bytes()

    def to_file(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        self.to_archive().to_file(path)
        return path

    def clone(self, allocator: Optional[IdAllocator] = None) -> "Docx":
        """아카이브 왕복으로 만든 독립 사본"""
        return Docx.from_archive(self.to_archive(), allocator)
