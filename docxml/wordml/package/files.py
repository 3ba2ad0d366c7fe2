"""패키지 파트 기반 클래스 (XML 파트, 바이너리 파트, 보존용 파트)"""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING, ClassVar, List, Optional

from lxml import etree

from docxml.wordml.base import guess_media_type
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)


def relationships_location(location: str) -> str:
    """파트의 관계 파일 경로 (word/document.xml -> word/_rels/document.xml.rels)"""
    directory, basename = posixpath.split(location)
    return posixpath.join(directory, "_rels", f"{basename}.rels")


class PackagePart:
    """패키지 안의 파일 하나"""

    content_type: ClassVar[str] = ContentType.XML.value

    def __init__(self, location: str):
        self.location = location

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.location!r})"

    def get_content_type(self) -> str:
        return self.content_type

    def get_related(self) -> List["PackagePart"]:
        """아카이브에 함께 기록할 파트 (자신 포함)"""
        return [self]

    def is_empty(self) -> bool:
        return False

    def add_to_archive(self, archive: Archive) -> None:
        raise NotImplementedError(f"{type(self).__name__}.add_to_archive() is not implemented")


class XmlFile(PackagePart):
    """XML 파트"""

    def to_node(self) -> etree._Element:
        raise NotImplementedError(f"{type(self).__name__}.to_node() is not implemented")

    def add_to_archive(self, archive: Archive) -> None:
        archive.add_xml_file(self.location, self.to_node())


class XmlFileWithRelationships(XmlFile):
    """자체 관계 파일을 가진 XML 파트"""

    def __init__(
        self,
        location: str,
        relationships: Optional["Relationships"] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        from docxml.wordml.package.relationships import Relationships

        super().__init__(location)
        if relationships is None:
            relationships = Relationships(relationships_location(location), allocator=allocator)
        self.relationships = relationships

    @property
    def allocator(self) -> IdAllocator:
        return self.relationships.allocator

    def get_related(self) -> List[PackagePart]:
        related: List[PackagePart] = [self]
        if not self.relationships.is_empty():
            related.extend(self.relationships.get_related())
        return related


class BinaryFile(PackagePart):
    """바이너리 파트 (이미지 등)"""

    def __init__(self, location: str, data: bytes, content_type: Optional[str] = None):
        super().__init__(location)
        self.data = data
        self._content_type = content_type or guess_media_type(location)

    def get_content_type(self) -> str:
        return self._content_type

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.location)[1].lstrip(".").lower()

    def add_to_archive(self, archive: Archive) -> None:
        archive.add_binary_file(self.location, self.data)

    @classmethod
    def from_archive(cls, archive: Archive, location: str) -> "BinaryFile":
        return cls(location, archive.read_binary(location))


class UnhandledXmlFile(XmlFile):
    """해석하지 않고 원본 그대로 보존하는 XML 파트"""

    def __init__(self, location: str, data: bytes, content_type: str = ContentType.XML.value):
        super().__init__(location)
        self.data = data
        self._content_type = content_type

    def get_content_type(self) -> str:
        return self._content_type

    def to_node(self) -> etree._Element:
        return etree.fromstring(self.data)

    def add_to_archive(self, archive: Archive) -> None:
        archive.add_binary_file(self.location, self.data)

    @classmethod
    def from_archive(cls, archive: Archive, location: str, content_type: str = ContentType.XML.value) -> "UnhandledXmlFile":
        logger.debug("Preserving unhandled part %s", location)
        return cls(location, archive.read_binary(location), content_type)
