"""문서 설정 파트 (word/settings.xml)"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from lxml import etree

from docxml.exceptions import DocxmlError
from docxml.wordml.base import NS, is_on, new_element, sub_element
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFileWithRelationships, relationships_location

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, bool] = {
    "is_track_changes_enabled": False,
    "even_and_odd_headers": False,
}


class Settings(XmlFileWithRelationships):
    """문서 설정

    is_track_changes_enabled: 변경 내용 추적 (w:trackRevisions)
    even_and_odd_headers: 짝수/홀수 페이지 머리글 구분 (w:evenAndOddHeaders)
    """

    content_type = ContentType.SETTINGS.value

    def __init__(
        self,
        location: str = PartLocation.SETTINGS.value,
        relationships: Optional["Relationships"] = None,
        allocator: Optional[IdAllocator] = None,
        **settings: bool,
    ):
        super().__init__(location, relationships, allocator)
        self._values: Dict[str, bool] = dict(DEFAULT_SETTINGS)
        for key, value in settings.items():
            self.set(key, value)

    def get(self, key: str) -> Any:
        if key not in DEFAULT_SETTINGS:
            raise KeyError(key)
        return self._values[key]

    def set(self, key: str, value: Any) -> None:
        if key not in DEFAULT_SETTINGS:
            raise KeyError(key)
        self._values[key] = bool(value)

    @property
    def is_track_changes_enabled(self) -> bool:
        return self._values["is_track_changes_enabled"]

    @is_track_changes_enabled.setter
    def is_track_changes_enabled(self, value: bool) -> None:
        self.set("is_track_changes_enabled", value)

    @property
    def even_and_odd_headers(self) -> bool:
        return self._values["even_and_odd_headers"]

    @even_and_odd_headers.setter
    def even_and_odd_headers(self, value: bool) -> None:
        self.set("even_and_odd_headers", value)

    def is_empty(self) -> bool:
        return self._values == DEFAULT_SETTINGS and self.relationships.is_empty()

    def to_node(self) -> etree._Element:
        root = new_element("w", "settings")
        if self.is_track_changes_enabled:
            sub_element(root, "w", "trackRevisions")
        if self.even_and_odd_headers:
            sub_element(root, "w", "evenAndOddHeaders", val="1")
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str, allocator: Optional[IdAllocator] = None) -> "Settings":
        from docxml.wordml.package.relationships import Relationships

        rels_location = relationships_location(location)
        relationships = None
        if archive.has_file(rels_location):
            try:
                relationships = Relationships.from_archive(archive, rels_location, allocator)
            except DocxmlError as e:
                logger.warning("Could not load relationships of %s, using none: %s", location, e)
        root = archive.read_xml(location)
        return cls(
            location,
            relationships,
            allocator,
            is_track_changes_enabled=is_on(root.find("w:trackRevisions", NS)),
            even_and_odd_headers=is_on(root.find("w:evenAndOddHeaders", NS)),
        )
