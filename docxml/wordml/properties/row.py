"""표 행 속성 (w:trPr)"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from docxml.wordml.base import NS, is_on, new_element, sub_element, to_int, w_attr
from docxml.wordml.length import Length, twip


@dataclass
class RowProperties:
    """행 모양"""
    is_header_row: bool = False
    is_unsplittable: bool = False
    height: Optional[Length] = None
    cell_spacing: Optional[Length] = None


def row_properties_from_node(node: Optional[etree._Element]) -> RowProperties:
    if node is None:
        return RowProperties()
    height = to_int(w_attr(node.find("w:trHeight", NS), "val"))
    spacing = to_int(w_attr(node.find("w:tblCellSpacing", NS), "w"))
    return RowProperties(
        is_header_row=is_on(node.find("w:tblHeader", NS)),
        is_unsplittable=is_on(node.find("w:cantSplit", NS)),
        height=twip(height) if height is not None else None,
        cell_spacing=twip(spacing) if spacing is not None else None,
    )


def row_properties_to_node(props: Optional[RowProperties] = None) -> etree._Element:
    """w:trPr 생성 (스키마 순서)"""
    props = props or RowProperties()
    trpr = new_element("w", "trPr")
    if props.is_unsplittable:
        sub_element(trpr, "w", "cantSplit")
    if props.height is not None:
        sub_element(trpr, "w", "trHeight", val=str(round(props.height.twip)))
    if props.is_header_row:
        sub_element(trpr, "w", "tblHeader")
    if props.cell_spacing is not None:
        sub_element(trpr, "w", "tblCellSpacing", w=str(round(props.cell_spacing.twip)), type="dxa")
    return trpr
