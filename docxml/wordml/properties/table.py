"""표 속성 (w:tblPr, w:tblGrid)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from lxml import etree

from docxml.wordml.base import NS, child_val, new_element, on_off_attr, qname, sub_element, tag, to_int, w_attr
from docxml.wordml.length import Length, twip
from docxml.wordml.properties.shared import Border, borders_from_node, borders_to_node


TABLE_BORDER_SIDES = (
    ("top", "top"),
    ("left", "left"),
    ("bottom", "bottom"),
    ("right", "right"),
    ("inside_h", "insideH"),
    ("inside_v", "insideV"),
)

LOOK_FLAGS = (
    ("first_row", "firstRow"),
    ("last_row", "lastRow"),
    ("first_column", "firstColumn"),
    ("last_column", "lastColumn"),
    ("no_h_band", "noHBand"),
    ("no_v_band", "noVBand"),
)

# w:tblW type="pct" 값은 1/50 퍼센트
PCT_FACTOR = 50


@dataclass(frozen=True)
class TableLook:
    """조건부 서식 적용 여부 (w:tblLook)"""
    first_row: bool = False
    last_row: bool = False
    first_column: bool = False
    last_column: bool = False
    no_h_band: bool = False
    no_v_band: bool = False


@dataclass(frozen=True)
class TableBorders:
    top: Optional[Border] = None
    left: Optional[Border] = None
    bottom: Optional[Border] = None
    right: Optional[Border] = None
    inside_h: Optional[Border] = None
    inside_v: Optional[Border] = None


@dataclass
class TableProperties:
    """표 모양

    width 는 Length (dxa), "50%" 같은 백분율 문자열, "auto" 중 하나.
    column_widths 는 w:tblGrid 로 기록된다.
    """
    style: Optional[str] = None
    width: Union[Length, str, None] = None
    look: Optional[TableLook] = None
    borders: Optional[TableBorders] = None
    column_widths: List[Length] = field(default_factory=list)


def _width_from_node(elem: Optional[etree._Element]) -> Union[Length, str, None]:
    if elem is None:
        return None
    width_type = w_attr(elem, "type", "dxa")
    value = w_attr(elem, "w", "0")
    if width_type == "pct":
        if value.endswith("%"):
            return value
        return f"{to_int(value) / PCT_FACTOR:g}%"
    if width_type == "dxa":
        return twip(to_int(value) or 0)
    return width_type


def _look_from_node(elem: Optional[etree._Element]) -> Optional[TableLook]:
    if elem is None:
        return None
    return TableLook(**{
        name: bool(on_off_attr(w_attr(elem, local)))
        for name, local in LOOK_FLAGS
    })


def table_properties_from_node(node: Optional[etree._Element]) -> TableProperties:
    """w:tblPr 파싱 (열 너비는 table_grid_from_node)"""
    if node is None:
        return TableProperties()
    return TableProperties(
        style=child_val(node, "tblStyle"),
        width=_width_from_node(node.find("w:tblW", NS)),
        look=_look_from_node(node.find("w:tblLook", NS)),
        borders=borders_from_node(node.find("w:tblBorders", NS), TableBorders, TABLE_BORDER_SIDES),
    )


def table_properties_to_node(props: Optional[TableProperties] = None) -> etree._Element:
    """w:tblPr 생성 (스키마 순서)"""
    props = props or TableProperties()
    tblpr = new_element("w", "tblPr")
    if props.style:
        sub_element(tblpr, "w", "tblStyle", val=props.style)

    if props.width is not None:
        if isinstance(props.width, Length):
            sub_element(tblpr, "w", "tblW", w=str(round(props.width.twip)), type="dxa")
        elif props.width.endswith("%"):
            sub_element(tblpr, "w", "tblW", w=props.width, type="pct")
        else:
            sub_element(tblpr, "w", "tblW", w="0", type=props.width)

    borders_to_node(tblpr, "tblBorders", props.borders, TABLE_BORDER_SIDES)

    if props.look is not None:
        look = sub_element(tblpr, "w", "tblLook")
        for name, local in LOOK_FLAGS:
            look.set(qname("w", local), "1" if getattr(props.look, name) else "0")
    return tblpr


def table_grid_from_node(node: Optional[etree._Element]) -> List[Length]:
    """w:tblGrid/w:gridCol 너비 목록"""
    if node is None:
        return []
    return [twip(to_int(col.get(tag("w", "w"))) or 0) for col in node.findall("w:gridCol", NS)]


def table_grid_to_node(column_widths: List[Length]) -> etree._Element:
    grid = new_element("w", "tblGrid")
    for width in column_widths:
        sub_element(grid, "w", "gridCol", w=str(round(width.twip)))
    return grid
