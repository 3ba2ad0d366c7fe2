"""[Content_Types].xml"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from lxml import etree

from docxml.wordml.base import NS
from docxml.wordml.package.archive import Archive, normalize_location
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFile


logger = logging.getLogger(__name__)


class ContentTypes(XmlFile):
    """확장자 기본 타입과 파트별 재정의"""

    def __init__(
        self,
        location: str = PartLocation.CONTENT_TYPES.value,
        defaults: Optional[Dict[str, str]] = None,
        overrides: Optional[Dict[str, str]] = None,
    ):
        super().__init__(location)
        if defaults is None:
            defaults = {
                "rels": ContentType.RELATIONSHIPS.value,
                "xml": ContentType.XML.value,
            }
        self.defaults: Dict[str, str] = dict(defaults)
        self.overrides: Dict[str, str] = dict(overrides or {})

    def add_default(self, extension: str, content_type: str) -> None:
        self.defaults[extension.lower()] = content_type

    def add_override(self, location: str, content_type: str) -> None:
        self.overrides["/" + normalize_location(location)] = content_type

    def get(self, location: str) -> Optional[str]:
        """파트 경로의 콘텐츠 타입 (재정의 우선, 없으면 확장자 기본값)"""
        part_name = "/" + normalize_location(location)
        if part_name in self.overrides:
            return self.overrides[part_name]
        extension = part_name.rsplit(".", 1)[-1].lower() if "." in part_name else ""
        return self.defaults.get(extension)

    def is_default(self, location: str, content_type: str) -> bool:
        extension = location.rsplit(".", 1)[-1].lower() if "." in location else ""
        return self.defaults.get(extension) == content_type

    def to_node(self) -> etree._Element:
        root = etree.Element(etree.QName(NS["ct"], "Types"), nsmap={None: NS["ct"]})
        for extension, content_type in self.defaults.items():
            default = etree.SubElement(root, etree.QName(NS["ct"], "Default"))
            default.set("Extension", extension)
            default.set("ContentType", content_type)
        for part_name, content_type in self.overrides.items():
            override = etree.SubElement(root, etree.QName(NS["ct"], "Override"))
            override.set("PartName", part_name)
            override.set("ContentType", content_type)
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str = PartLocation.CONTENT_TYPES.value) -> "ContentTypes":
        root = archive.read_xml(location)
        defaults = {
            elem.get("Extension", "").lower(): elem.get("ContentType", "")
            for elem in root.findall("ct:Default", NS)
        }
        overrides = {
            "/" + normalize_location(elem.get("PartName", "")): elem.get("ContentType", "")
            for elem in root.findall("ct:Override", NS)
        }
        return cls(location, defaults, overrides)
