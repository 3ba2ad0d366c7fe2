"""표 행 (w:tr) 과 변경 추적 행"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from lxml import etree

from docxml.exceptions import MissingAncestorError
from docxml.wordml.base import NS, new_element, tag
from docxml.wordml.component import (
    Ancestry,
    Component,
    ComponentContext,
    find_ancestor,
    register_component,
)
from docxml.wordml.components.table import Table
from docxml.wordml.properties.cell import is_vertical_continuation
from docxml.wordml.properties.change import (
    ChangeInformation,
    change_information_from_node,
    set_change_attributes,
)
from docxml.wordml.properties.row import RowProperties, row_properties_from_node, row_properties_to_node


@dataclass
class TrackedRowProperties(RowProperties):
    """행 속성 + 추가/삭제 추적 정보"""
    id: int = 0
    author: str = ""
    date: datetime = datetime.fromtimestamp(0, tz=timezone.utc)

    @property
    def change(self) -> ChangeInformation:
        return ChangeInformation(self.id, self.author, self.date)


def cell_nodes(tr: etree._Element):
    """세로 병합으로 이어지는 자리 표시 셀을 제외한 w:tc"""
    return [tc for tc in tr.findall("w:tc", NS) if not is_vertical_continuation(tc.find("w:tcPr", NS))]


@register_component
class Row(Component):
    """표 행, 셀 배치는 Table.model 을 따름"""

    allowed_children = ("Cell",)
    node_tag = tag("w", "tr")
    props_class = RowProperties
    # trPr 안에 기록하는 변경 추적 요소
    change_local: Optional[str] = None

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        table = find_ancestor(ancestry, Table)
        if table is None:
            raise MissingAncestorError("A row cannot be rendered outside the context of a table")
        model = table.model
        y = next((i for i, row in enumerate(table.rows) if row is self), None)
        if y is None:
            raise MissingAncestorError("Row is not a child of its table ancestor")
        anc = (self,) + tuple(ancestry)

        tr = new_element("w", "tr")
        trpr = row_properties_to_node(self.props)
        if self.change_local:
            set_change_attributes(etree.SubElement(trpr, tag("w", self.change_local)), self.props.change)
        if len(trpr):
            tr.append(trpr)

        for x in range(model.column_count):
            cell = model.get_node_at_cell(x, y)
            if cell is None:
                continue
            info = model.get_cell_info(cell)
            if info.column != x:
                # 가로 병합으로 이어지는 칸
                continue
            if info.row == y:
                tr.append(cell.to_node(anc))
            else:
                tr.append(cell.to_repeating_node(anc, x, y))
        return tr

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return (
            node.tag == cls.node_tag
            and node.find("w:trPr/w:ins", NS) is None
            and node.find("w:trPr/w:del", NS) is None
        )

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Row":
        return cls(
            row_properties_from_node(node.find("w:trPr", NS)),
            *cls.children_from_nodes(cell_nodes(node), context),
        )


class _TrackedRow(Row):
    props_class = TrackedRowProperties

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return node.tag == cls.node_tag and node.find(f"w:trPr/w:{cls.change_local}", NS) is not None

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "_TrackedRow":
        trpr = node.find("w:trPr", NS)
        row_props = row_properties_from_node(trpr)
        change = change_information_from_node(trpr.find(f"w:{cls.change_local}", NS))
        props = TrackedRowProperties(
            is_header_row=row_props.is_header_row,
            is_unsplittable=row_props.is_unsplittable,
            height=row_props.height,
            cell_spacing=row_props.cell_spacing,
            id=change.id,
            author=change.author,
            date=change.date,
        )
        return cls(props, *cls.children_from_nodes(cell_nodes(node), context))


@register_component
class RowAddition(_TrackedRow):
    """추가로 추적되는 행"""

    change_local = "ins"


@register_component
class RowDeletion(_TrackedRow):
    """삭제로 추적되는 행"""

    change_local = "del"
