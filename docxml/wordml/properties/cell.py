"""표 셀 속성 (w:tcPr)

row_span 은 w:tcPr 에 직접 기록되지 않는다. 병합 시작 셀은
vMerge="restart", 아래 행의 자리 표시 셀은 vMerge="continue" 로 기록되고,
파싱할 때 Cell 컴포넌트가 다음 행들을 세어 복원한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from docxml.wordml.base import NS, child_val, new_element, sub_element, to_int, w_attr
from docxml.wordml.length import Length, twip
from docxml.wordml.properties.shared import (
    Border,
    Shading,
    borders_from_node,
    borders_to_node,
    shading_from_node,
    shading_to_node,
)


CELL_BORDER_SIDES = (
    ("top", "top"),
    ("start", "start"),
    ("bottom", "bottom"),
    ("end", "end"),
    ("inside_h", "insideH"),
    ("inside_v", "insideV"),
    ("tl2br", "tl2br"),
    ("tr2bl", "tr2bl"),
)


@dataclass(frozen=True)
class CellBorders:
    top: Optional[Border] = None
    start: Optional[Border] = None
    bottom: Optional[Border] = None
    end: Optional[Border] = None
    inside_h: Optional[Border] = None
    inside_v: Optional[Border] = None
    tl2br: Optional[Border] = None
    tr2bl: Optional[Border] = None


@dataclass
class CellProperties:
    """셀 모양과 병합 범위"""
    col_span: int = 1
    row_span: int = 1
    width: Optional[Length] = None
    shading: Optional[Shading] = None
    borders: Optional[CellBorders] = None


def is_vertical_continuation(tcpr: Optional[etree._Element]) -> bool:
    """vMerge="continue" 또는 값 없는 vMerge"""
    if tcpr is None:
        return False
    v_merge = tcpr.find("w:vMerge", NS)
    return v_merge is not None and w_attr(v_merge, "val", "continue") == "continue"


def cell_properties_from_node(node: Optional[etree._Element]) -> CellProperties:
    """w:tcPr 파싱 (row_span 제외)"""
    if node is None:
        return CellProperties()
    width = None
    tcw = node.find("w:tcW", NS)
    if tcw is not None and w_attr(tcw, "type", "dxa") == "dxa":
        value = to_int(w_attr(tcw, "w"))
        width = twip(value) if value is not None else None
    return CellProperties(
        col_span=to_int(child_val(node, "gridSpan")) or 1,
        width=width,
        shading=shading_from_node(node.find("w:shd", NS)),
        borders=borders_from_node(node.find("w:tcBorders", NS), CellBorders, CELL_BORDER_SIDES),
    )


def cell_properties_to_node(
    props: Optional[CellProperties] = None,
    as_repeating: bool = False,
    width: Optional[Length] = None,
) -> etree._Element:
    """w:tcPr 생성

    as_repeating 이면 세로 병합의 이어지는 자리 표시 셀.
    width 는 props.width 가 없을 때 쓰는 계산된 너비.
    """
    props = props or CellProperties()
    tcpr = new_element("w", "tcPr")
    cell_width = props.width if props.width is not None else width
    if cell_width is not None:
        sub_element(tcpr, "w", "tcW", w=str(round(cell_width.twip)), type="dxa")
    if props.col_span > 1:
        sub_element(tcpr, "w", "gridSpan", val=str(props.col_span))
    if as_repeating:
        sub_element(tcpr, "w", "vMerge", val="continue")
    elif props.row_span > 1:
        sub_element(tcpr, "w", "vMerge", val="restart")
    borders_to_node(tcpr, "tcBorders", props.borders, CELL_BORDER_SIDES)
    shading_to_node(tcpr, props.shading)
    return tcpr
