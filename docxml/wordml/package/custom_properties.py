"""사용자 지정 문서 속성 파트 (docProps/custom.xml)

각 속성은 op:property 요소 하나이며, 값은 vt: 네임스페이스의 타입 요소
(vt:lpwstr, vt:i4, vt:bool, vt:filetime) 로 기록된다. pid 는 2 부터 발급한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Union

from lxml import etree

from docxml.exceptions import DuplicateIdentifierError
from docxml.wordml.base import NS, format_datetime, parse_datetime, to_int
from docxml.wordml.identifiers import NumberMap
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFile


logger = logging.getLogger(__name__)

# 모든 사용자 지정 속성이 공유하는 형식 ID
FMTID = "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}"
FIRST_PID = 2

CustomPropertyValue = Union[str, int, bool, datetime]


class CustomPropertyType(str, Enum):
    """vt: 값 요소 이름"""
    TEXT = "lpwstr"
    NUMBER = "i4"
    DATE = "filetime"
    BOOLEAN = "bool"


@dataclass(frozen=True)
class CustomProperty:
    name: str
    type: CustomPropertyType
    value: CustomPropertyValue


def infer_type(value: CustomPropertyValue) -> CustomPropertyType:
    """파이썬 값에 맞는 속성 타입 (bool 은 int 보다 먼저 검사)"""
    if isinstance(value, bool):
        return CustomPropertyType.BOOLEAN
    if isinstance(value, int):
        return CustomPropertyType.NUMBER
    if isinstance(value, datetime):
        return CustomPropertyType.DATE
    if isinstance(value, str):
        return CustomPropertyType.TEXT
    raise ValueError(f"Unsupported custom property value {value!r}")


def format_value(prop: CustomProperty) -> str:
    if prop.type == CustomPropertyType.BOOLEAN:
        return "true" if prop.value else "false"
    if prop.type == CustomPropertyType.DATE:
        return format_datetime(prop.value)
    return str(prop.value)


def parse_value(type: CustomPropertyType, text: str) -> CustomPropertyValue:
    if type == CustomPropertyType.BOOLEAN:
        return text.strip().lower() in ("true", "1")
    if type == CustomPropertyType.NUMBER:
        return to_int(text) or 0
    if type == CustomPropertyType.DATE:
        return parse_datetime(text)
    return text


class CustomProperties(XmlFile):
    """사용자 지정 속성 목록"""

    content_type = ContentType.CUSTOM_PROPERTIES.value

    def __init__(self, location: str = PartLocation.CUSTOM_PROPERTIES.value):
        super().__init__(location)
        self._properties: NumberMap[CustomProperty] = NumberMap(FIRST_PID)

    def is_empty(self) -> bool:
        return not len(self._properties)

    def values(self) -> List[CustomProperty]:
        return self._properties.array()

    def get(self, name: str) -> Optional[CustomProperty]:
        for prop in self._properties:
            if prop.name == name:
                return prop
        return None

    def add(
        self,
        name: str,
        value: CustomPropertyValue,
        type: Optional[CustomPropertyType] = None,
    ) -> int:
        """
        속성 추가

        Args:
            name: 속성 이름 (문서 안에서 고유)
            value: 값
            type: 값 타입 (없으면 value 에서 추론)

        Returns:
            발급된 pid
        """
        if self.get(name) is not None:
            raise DuplicateIdentifierError(f'A custom property named "{name}" already exists')
        type = CustomPropertyType(type) if type is not None else infer_type(value)
        if type == CustomPropertyType.NUMBER and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f'Custom property "{name}" of type i4 needs an integer value, got {value!r}')
        if type == CustomPropertyType.DATE and not isinstance(value, datetime):
            raise ValueError(f'Custom property "{name}" of type filetime needs a datetime value, got {value!r}')
        return self._properties.add(CustomProperty(name, type, value))

    def add_properties(self, properties: Iterable[CustomProperty]) -> List[int]:
        return [self.add(prop.name, prop.value, prop.type) for prop in properties]

    def to_node(self) -> etree._Element:
        root = etree.Element(etree.QName(NS["op"], "Properties"), nsmap={None: NS["op"], "vt": NS["vt"]})
        for pid, prop in self._properties.items():
            elem = etree.SubElement(root, etree.QName(NS["op"], "property"))
            elem.set("fmtid", FMTID)
            elem.set("pid", str(pid))
            elem.set("name", prop.name)
            value = etree.SubElement(elem, etree.QName(NS["vt"], prop.type.value))
            value.text = format_value(prop)
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str) -> "CustomProperties":
        part = cls(location)
        for elem in archive.read_xml(location).findall("op:property", NS):
            value = elem[0] if len(elem) else None
            if value is None:
                logger.warning("Custom property %s has no value, skipping", elem.get("name"))
                continue
            local = etree.QName(value).localname
            try:
                type = CustomPropertyType(local)
            except ValueError:
                logger.warning("Custom property %s has unsupported type vt:%s, reading as text", elem.get("name"), local)
                type = CustomPropertyType.TEXT
            pid = to_int(elem.get("pid"))
            prop = CustomProperty(elem.get("name", ""), type, parse_value(type, value.text or ""))
            if pid is not None and pid not in part._properties:
                part._properties.set(pid, prop)
            else:
                part._properties.add(prop)
        return part
