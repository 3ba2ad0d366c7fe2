"""스타일 파트 (word/styles.xml)"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from lxml import etree

from docxml.exceptions import DuplicateIdentifierError
from docxml.wordml.base import NS, child_val, new_element, on_off_attr, qname, sub_element, to_int, w_attr
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFile
from docxml.wordml.properties.paragraph import (
    ParagraphProperties,
    paragraph_properties_from_node,
    paragraph_properties_to_node,
)
from docxml.wordml.properties.table import (
    TableProperties,
    table_properties_from_node,
    table_properties_to_node,
)
from docxml.wordml.properties.table_conditional import (
    TableConditionalProperties,
    table_conditions_from_nodes,
    table_conditions_to_nodes,
)
from docxml.wordml.properties.text import (
    TextProperties,
    text_properties_from_node,
    text_properties_to_node,
)


logger = logging.getLogger(__name__)

STYLE_TYPES = ("paragraph", "character", "table")

# (속성 이름, w: 속성)
LATENT_FLAGS = (
    ("locked", "locked"),
    ("semi_hidden", "semiHidden"),
    ("unhide_when_used", "unhideWhenUsed"),
    ("q_format", "qFormat"),
)


@dataclass(frozen=True)
class StyleDefinition:
    """사용자 스타일 (w:style)

    id 가 없으면 이름에서 영숫자만 남겨 만들고, 이름도 없으면 랜덤 ID 를 쓴다.
    table_conditions 는 표 스타일의 조건부 서식 (firstRow, band1Horz 등)
    """
    id: Optional[str] = None
    type: str = "paragraph"
    name: Optional[str] = None
    based_on: Optional[str] = None
    is_default: bool = False
    paragraph: Optional[ParagraphProperties] = None
    text: Optional[TextProperties] = None
    table: Optional[TableProperties] = None
    table_conditions: Optional[Dict[str, TableConditionalProperties]] = None


@dataclass(frozen=True)
class LatentStyle:
    """잠재 스타일 예외 (w:lsdException)"""
    name: str
    locked: Optional[bool] = None
    ui_priority: Optional[int] = None
    semi_hidden: Optional[bool] = None
    unhide_when_used: Optional[bool] = None
    q_format: Optional[bool] = None


class Styles(XmlFile):
    """스타일 팔레트"""

    content_type = ContentType.STYLES.value

    def __init__(self, location: str = PartLocation.STYLES.value, allocator: Optional[IdAllocator] = None):
        super().__init__(location)
        self.allocator = allocator or IdAllocator()
        self._styles: List[StyleDefinition] = []
        self._latent: List[LatentStyle] = []

    @property
    def styles(self) -> List[StyleDefinition]:
        """사용자 스타일 목록 (잠재 스타일 제외)"""
        return list(self._styles)

    @property
    def latent_styles(self) -> List[LatentStyle]:
        return list(self._latent)

    def is_empty(self) -> bool:
        return not self._styles and not self._latent

    # ============================================================
    # 추가/조회
    # ============================================================

    def add(self, style: StyleDefinition) -> str:
        """스타일 추가 후 ID 반환 (중복 ID 는 DuplicateIdentifierError)"""
        style_id = style.id
        if not style_id and style.name:
            style_id = re.sub(r"[^a-zA-Z0-9]", "", style.name)
        if not style_id:
            style_id = self.allocator.random_id("style")
        if self.has_style(style_id):
            raise DuplicateIdentifierError(f'A style with identifier "{style_id}" already exists')
        self._styles.append(dataclasses.replace(style, id=style_id))
        return style_id

    def add_styles(self, styles: List[StyleDefinition]) -> List[str]:
        return [self.add(style) for style in styles]

    def add_latent(self, style: LatentStyle) -> None:
        self._latent.append(style)

    def get(self, style_id: str) -> Optional[StyleDefinition]:
        for style in self._styles:
            if style.id == style_id:
                return style
        return None

    def has_style(self, style_id: str) -> bool:
        """사용자 스타일 ID 또는 잠재 스타일 이름"""
        return any(style.id == style_id for style in self._styles) or any(
            latent.name == style_id for latent in self._latent
        )

    def ensure_style(self, style_id: str, type: str = "paragraph") -> bool:
        """없는 스타일이면 Normal 기반 빈 스타일을 추가 (추가했으면 True)"""
        if not style_id or self.has_style(style_id):
            return False
        self.add(StyleDefinition(id=style_id, type=type, based_on="Normal"))
        logger.debug("Added placeholder %s style %s", type, style_id)
        return True

    # ============================================================
    # 직렬화
    # ============================================================

    def _latent_to_node(self, root: etree._Element) -> None:
        latent = sub_element(
            root, "w", "latentStyles",
            defLockedState="0",
            defUIPriority="99",
            defSemiHidden="0",
            defUnhideWhenUsed="0",
            defQFormat="0",
            count=str(len(self._latent)),
        )
        for style in self._latent:
            exception = sub_element(latent, "w", "lsdException", name=style.name)
            if style.locked is not None:
                exception.set(qname("w", "locked"), "1" if style.locked else "0")
            if style.ui_priority is not None:
                exception.set(qname("w", "uiPriority"), str(style.ui_priority))
            for name, local in LATENT_FLAGS[1:]:
                value = getattr(style, name)
                if value is not None:
                    exception.set(qname("w", local), "1" if value else "0")

    def to_node(self) -> etree._Element:
        root = new_element("w", "styles")
        if self._latent:
            self._latent_to_node(root)

        for style in self._styles:
            elem = sub_element(root, "w", "style", type=style.type, styleId=style.id)
            if style.is_default:
                elem.set(qname("w", "default"), "1")
            if style.name:
                sub_element(elem, "w", "name", val=style.name)
            if style.based_on:
                sub_element(elem, "w", "basedOn", val=style.based_on)
            if style.paragraph is not None:
                ppr = paragraph_properties_to_node(style.paragraph)
                if len(ppr):
                    elem.append(ppr)
            if style.text is not None:
                rpr = text_properties_to_node(style.text)
                if len(rpr):
                    elem.append(rpr)
            if style.table is not None:
                tblpr = table_properties_to_node(style.table)
                if len(tblpr):
                    elem.append(tblpr)
            if style.table_conditions:
                elem.extend(table_conditions_to_nodes(style.table_conditions))
        return root

    @classmethod
    def from_node(cls, root: etree._Element, location: str, allocator: Optional[IdAllocator] = None) -> "Styles":
        styles = cls(location, allocator)
        for elem in root.findall("w:style", NS):
            style_type = w_attr(elem, "type")
            style_id = w_attr(elem, "styleId")
            if style_type not in STYLE_TYPES or not style_id:
                continue
            ppr = elem.find("w:pPr", NS)
            rpr = elem.find("w:rPr", NS)
            tblpr = elem.find("w:tblPr", NS)
            conditions = table_conditions_from_nodes(elem.findall("w:tblStylePr", NS))
            styles.add(StyleDefinition(
                id=style_id,
                type=style_type,
                name=child_val(elem, "name"),
                based_on=child_val(elem, "basedOn"),
                is_default=bool(on_off_attr(w_attr(elem, "default"))),
                paragraph=paragraph_properties_from_node(ppr) if ppr is not None else None,
                text=text_properties_from_node(rpr) if rpr is not None else None,
                table=table_properties_from_node(tblpr) if tblpr is not None else None,
                table_conditions=conditions or None,
            ))

        for elem in root.findall("w:latentStyles/w:lsdException", NS):
            styles.add_latent(LatentStyle(
                name=w_attr(elem, "name", ""),
                locked=on_off_attr(w_attr(elem, "locked")),
                ui_priority=to_int(w_attr(elem, "uiPriority")),
                semi_hidden=on_off_attr(w_attr(elem, "semiHidden")),
                unhide_when_used=on_off_attr(w_attr(elem, "unhideWhenUsed")),
                q_format=on_off_attr(w_attr(elem, "qFormat")),
            ))
        return styles

    @classmethod
    def from_archive(cls, archive: Archive, location: str, allocator: Optional[IdAllocator] = None) -> "Styles":
        return cls.from_node(archive.read_xml(location), location, allocator)
