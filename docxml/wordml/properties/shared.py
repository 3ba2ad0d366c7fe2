"""여러 속성 코덱이 공유하는 테두리/음영 값"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from lxml import etree

from docxml.wordml.base import NS, qname, sub_element, to_int, w_attr
from docxml.wordml.length import Length, pt


# w:sz 는 1/8 포인트 단위
EIGHTH_POINTS_PER_PT = 8


@dataclass(frozen=True)
class Border:
    """테두리 선 (w:top, w:insideH 등)"""
    type: Optional[str] = None
    width: Optional[Length] = None
    spacing: Optional[int] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class Shading:
    """음영 (w:shd)"""
    fill: Optional[str] = None
    color: Optional[str] = None
    pattern: str = "clear"


def border_to_node(parent: etree._Element, local: str, border: Optional[Border]) -> None:
    if border is None:
        return
    elem = etree.SubElement(parent, qname("w", local))
    elem.set(qname("w", "val"), border.type or "single")
    if border.width is not None:
        elem.set(qname("w", "sz"), str(round(border.width.pt * EIGHTH_POINTS_PER_PT)))
    if border.spacing is not None:
        elem.set(qname("w", "space"), str(border.spacing))
    if border.color:
        elem.set(qname("w", "color"), border.color)


def border_from_node(elem: Optional[etree._Element]) -> Optional[Border]:
    if elem is None:
        return None
    size = to_int(w_attr(elem, "sz"))
    return Border(
        type=w_attr(elem, "val"),
        width=pt(size / EIGHTH_POINTS_PER_PT) if size is not None else None,
        spacing=to_int(w_attr(elem, "space")),
        color=w_attr(elem, "color"),
    )


def borders_to_node(
    parent: etree._Element,
    local: str,
    borders: object,
    sides: Sequence[Tuple[str, str]],
) -> None:
    """테두리 묶음 요소 생성 (sides: (필드 이름, 요소 이름) 스키마 순서)"""
    if borders is None:
        return
    container = etree.SubElement(parent, qname("w", local))
    for field_name, side in sides:
        border_to_node(container, side, getattr(borders, field_name))


def borders_from_node(elem: Optional[etree._Element], factory, sides: Sequence[Tuple[str, str]]):
    if elem is None:
        return None
    return factory(**{
        field_name: border_from_node(elem.find(f"w:{side}", NS))
        for field_name, side in sides
    })


def shading_to_node(parent: etree._Element, shading: Optional[Shading]) -> None:
    if shading is None:
        return
    attrs = {"val": shading.pattern}
    if shading.color:
        attrs["color"] = shading.color
    if shading.fill:
        attrs["fill"] = shading.fill
    sub_element(parent, "w", "shd", **attrs)


def shading_from_node(elem: Optional[etree._Element]) -> Optional[Shading]:
    if elem is None:
        return None
    return Shading(
        fill=w_attr(elem, "fill"),
        color=w_attr(elem, "color"),
        pattern=w_attr(elem, "val", "clear"),
    )
