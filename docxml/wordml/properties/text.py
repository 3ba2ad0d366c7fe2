"""텍스트 런 속성 (w:rPr)"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from lxml import etree

from docxml.wordml.base import NS, child_val, is_on, new_element, sub_element, to_int
from docxml.wordml.length import Length, hpt


@dataclass
class TextProperties:
    """글자 모양"""
    style: Optional[str] = None
    color: Optional[str] = None
    # True 는 "single" 로 기록하고 "single" 은 True 로 읽는다
    underline: Union[bool, str, None] = None
    bold: bool = False
    italic: bool = False
    small_caps: bool = False
    vertical_align: Optional[str] = None
    language: Optional[str] = None
    font_size: Optional[Length] = None


def _underline_from_value(value: Optional[str]) -> Union[bool, str, None]:
    if value == "single":
        return True
    return value


def text_properties_from_node(node: Optional[etree._Element]) -> TextProperties:
    """w:rPr 파싱 (None 이면 기본값)"""
    if node is None:
        return TextProperties()
    size = to_int(child_val(node, "sz"))
    return TextProperties(
        style=child_val(node, "rStyle"),
        color=child_val(node, "color"),
        underline=_underline_from_value(child_val(node, "u")),
        bold=is_on(node.find("w:b", NS)),
        italic=is_on(node.find("w:i", NS)),
        small_caps=is_on(node.find("w:smallCaps", NS)),
        vertical_align=child_val(node, "vertAlign"),
        language=child_val(node, "lang"),
        font_size=hpt(size) if size is not None else None,
    )


def text_properties_to_node(props: Optional[TextProperties] = None) -> etree._Element:
    """w:rPr 생성 (스키마 순서)"""
    props = props or TextProperties()
    rpr = new_element("w", "rPr")
    if props.style:
        sub_element(rpr, "w", "rStyle", val=props.style)
    if props.bold:
        sub_element(rpr, "w", "b")
    if props.italic:
        sub_element(rpr, "w", "i")
    if props.small_caps:
        sub_element(rpr, "w", "smallCaps")
    if props.color:
        sub_element(rpr, "w", "color", val=props.color)
    if props.font_size is not None:
        sub_element(rpr, "w", "sz", val=str(round(props.font_size.hpt)))
    if props.underline:
        sub_element(rpr, "w", "u", val="single" if props.underline is True else props.underline)
    if props.vertical_align:
        sub_element(rpr, "w", "vertAlign", val=props.vertical_align)
    if props.language:
        sub_element(rpr, "w", "lang", val=props.language)
    return rpr
