"""문단 속성 (w:pPr)"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from lxml import etree

from docxml.wordml.base import (
    NS,
    child_val,
    new_element,
    on_off_attr,
    qname,
    sub_element,
    to_int,
    w_attr,
)
from docxml.wordml.length import Length, twip
from docxml.wordml.properties.change import (
    ChangeInformation,
    change_information_from_node,
    set_change_attributes,
)
from docxml.wordml.properties.section import SectionProperties, section_properties_to_node
from docxml.wordml.properties.text import (
    TextProperties,
    text_properties_from_node,
    text_properties_to_node,
)


SPACING_LENGTHS = ("before", "after", "line")
INDENT_LENGTHS = (("left", "left"), ("right", "right"), ("hanging", "hanging"), ("first_line", "firstLine"))
INDENT_CHARS = (
    ("left_chars", "leftChars"),
    ("right_chars", "rightChars"),
    ("hanging_chars", "hangingChars"),
    ("first_line_chars", "firstLineChars"),
)


@dataclass(frozen=True)
class Spacing:
    """문단 위/아래 간격과 줄 간격"""
    before: Optional[Length] = None
    after: Optional[Length] = None
    line: Optional[Length] = None
    line_rule: Optional[str] = None
    before_auto_spacing: Optional[bool] = None
    after_auto_spacing: Optional[bool] = None


@dataclass(frozen=True)
class Indentation:
    """들여쓰기"""
    left: Optional[Length] = None
    right: Optional[Length] = None
    hanging: Optional[Length] = None
    first_line: Optional[Length] = None
    left_chars: Optional[int] = None
    right_chars: Optional[int] = None
    hanging_chars: Optional[int] = None
    first_line_chars: Optional[int] = None


@dataclass(frozen=True)
class NumberingReference:
    """w:numPr (w:numId, w:ilvl)"""
    id: int
    level: int = 0


@dataclass
class ParagraphPropertiesChange:
    """추적된 문단 속성 변경 (w:pPrChange), properties 는 변경 전 속성"""
    id: int
    author: str
    date: datetime
    properties: Optional["ParagraphProperties"] = None

    @property
    def information(self) -> ChangeInformation:
        return ChangeInformation(self.id, self.author, self.date)


@dataclass
class ParagraphProperties:
    """문단 모양"""
    style: Optional[str] = None
    alignment: Optional[str] = None
    outline_level: Optional[int] = None
    numbering: Optional[NumberingReference] = None
    spacing: Optional[Spacing] = None
    indentation: Optional[Indentation] = None
    # 문단 기호의 글자 모양
    pilcrow: Optional[TextProperties] = None
    change: Optional[ParagraphPropertiesChange] = None


def _twip_attr(elem: etree._Element, local: str) -> Optional[Length]:
    value = to_int(w_attr(elem, local))
    return twip(value) if value is not None else None


def _spacing_from_node(elem: Optional[etree._Element]) -> Optional[Spacing]:
    if elem is None:
        return None
    return Spacing(
        before=_twip_attr(elem, "before"),
        after=_twip_attr(elem, "after"),
        line=_twip_attr(elem, "line"),
        line_rule=w_attr(elem, "lineRule"),
        before_auto_spacing=on_off_attr(w_attr(elem, "beforeAutospacing")),
        after_auto_spacing=on_off_attr(w_attr(elem, "afterAutospacing")),
    )


def _indentation_from_node(elem: Optional[etree._Element]) -> Optional[Indentation]:
    if elem is None:
        return None
    values = {name: _twip_attr(elem, local) for name, local in INDENT_LENGTHS}
    values.update({name: to_int(w_attr(elem, local)) for name, local in INDENT_CHARS})
    return Indentation(**values)


def _numbering_from_node(elem: Optional[etree._Element]) -> Optional[NumberingReference]:
    if elem is None:
        return None
    num_id = to_int(child_val(elem, "numId"))
    if num_id is None:
        return None
    return NumberingReference(id=num_id, level=to_int(child_val(elem, "ilvl")) or 0)


def paragraph_properties_from_node(node: Optional[etree._Element]) -> ParagraphProperties:
    """w:pPr 파싱 (w:sectPr 는 Section 컴포넌트가 읽음)"""
    if node is None:
        return ParagraphProperties()

    rpr = node.find("w:rPr", NS)
    change = None
    change_node = node.find("w:pPrChange", NS)
    if change_node is not None:
        info = change_information_from_node(change_node)
        change = ParagraphPropertiesChange(
            id=info.id,
            author=info.author,
            date=info.date,
            properties=paragraph_properties_from_node(change_node.find("w:pPr", NS)),
        )

    return ParagraphProperties(
        style=child_val(node, "pStyle"),
        alignment=child_val(node, "jc"),
        outline_level=to_int(child_val(node, "outlineLvl")),
        numbering=_numbering_from_node(node.find("w:numPr", NS)),
        spacing=_spacing_from_node(node.find("w:spacing", NS)),
        indentation=_indentation_from_node(node.find("w:ind", NS)),
        pilcrow=text_properties_from_node(rpr) if rpr is not None else None,
        change=change,
    )


def _set_twip(elem: etree._Element, local: str, value: Optional[Length]) -> None:
    if value is not None:
        elem.set(qname("w", local), str(round(value.twip)))


def paragraph_properties_to_node(
    props: Optional[ParagraphProperties] = None,
    section_properties: Optional[SectionProperties] = None,
) -> etree._Element:
    """w:pPr 생성 (section_properties 가 있으면 구역 끝 문단)"""
    props = props or ParagraphProperties()
    ppr = new_element("w", "pPr")

    if props.style:
        sub_element(ppr, "w", "pStyle", val=props.style)

    if props.numbering is not None:
        num_pr = sub_element(ppr, "w", "numPr")
        sub_element(num_pr, "w", "ilvl", val=str(props.numbering.level))
        sub_element(num_pr, "w", "numId", val=str(props.numbering.id))

    if props.spacing is not None:
        spacing = sub_element(ppr, "w", "spacing")
        for local in SPACING_LENGTHS:
            _set_twip(spacing, local, getattr(props.spacing, local))
        if props.spacing.line_rule:
            spacing.set(qname("w", "lineRule"), props.spacing.line_rule)
        if props.spacing.before_auto_spacing is not None:
            spacing.set(qname("w", "beforeAutospacing"), "1" if props.spacing.before_auto_spacing else "0")
        if props.spacing.after_auto_spacing is not None:
            spacing.set(qname("w", "afterAutospacing"), "1" if props.spacing.after_auto_spacing else "0")

    if props.indentation is not None:
        ind = sub_element(ppr, "w", "ind")
        for name, local in INDENT_LENGTHS:
            _set_twip(ind, local, getattr(props.indentation, name))
        for name, local in INDENT_CHARS:
            value = getattr(props.indentation, name)
            if value is not None:
                ind.set(qname("w", local), str(value))

    if props.alignment:
        sub_element(ppr, "w", "jc", val=props.alignment)

    if props.outline_level is not None:
        sub_element(ppr, "w", "outlineLvl", val=str(props.outline_level))

    if props.pilcrow is not None:
        rpr = text_properties_to_node(props.pilcrow)
        if len(rpr):
            ppr.append(rpr)

    if section_properties is not None:
        ppr.append(section_properties_to_node(section_properties))

    if props.change is not None:
        change = set_change_attributes(sub_element(ppr, "w", "pPrChange"), props.change.information)
        change.append(paragraph_properties_to_node(props.change.properties))

    return ppr
