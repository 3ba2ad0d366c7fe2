"""표 셀 (w:tc)"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from docxml.exceptions import MissingAncestorError
from docxml.wordml.base import NS, new_element, tag, to_int, w_attr
from docxml.wordml.component import (
    Ancestry,
    Component,
    ComponentContext,
    find_ancestor,
    register_component,
)
from docxml.wordml.components.table import Table
from docxml.wordml.length import Length, pt
from docxml.wordml.properties.cell import (
    CellProperties,
    cell_properties_from_node,
    cell_properties_to_node,
    is_vertical_continuation,
)


def _grid_span(tc: etree._Element) -> int:
    return to_int(w_attr(tc.find("w:tcPr/w:gridSpan", NS), "val")) or 1


def _cell_at_column(tr: etree._Element, column: int) -> Optional[etree._Element]:
    """그리드 열 column 에서 시작하는 w:tc"""
    x = 0
    for tc in tr.findall("w:tc", NS):
        if x == column:
            return tc
        x += _grid_span(tc)
        if x > column:
            return None
    return None


def _row_span(tc: etree._Element) -> int:
    """vMerge="restart" 셀 아래로 이어지는 행 수 + 1"""
    v_merge = tc.find("w:tcPr/w:vMerge", NS)
    tr = tc.getparent()
    if v_merge is None or w_attr(v_merge, "val") != "restart" or tr is None:
        return 1
    column = sum(_grid_span(sibling) for sibling in tc.itersiblings(tag("w", "tc"), preceding=True))
    span = 1
    for next_tr in tr.itersiblings(tag("w", "tr")):
        below = _cell_at_column(next_tr, column)
        if below is None or not is_vertical_continuation(below.find("w:tcPr", NS)):
            break
        span += 1
    return span


@register_component
class Cell(Component):
    """표 셀"""

    allowed_children = ("Paragraph", "Table")
    node_tag = tag("w", "tc")
    props_class = CellProperties

    def _table(self, ancestry: Ancestry) -> Table:
        table = find_ancestor(ancestry, Table)
        if table is None:
            raise MissingAncestorError("A cell cannot be rendered outside the context of a table")
        return table

    def _computed_width(self, table: Table, column: int, colspan: int) -> Optional[Length]:
        widths = table.props.column_widths[column:column + colspan]
        if not widths:
            return None
        return pt(sum(width.pt for width in widths))

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        table = self._table(ancestry)
        info = table.model.get_cell_info(self)

        tc = new_element("w", "tc")
        tc.append(cell_properties_to_node(
            self.props,
            width=self._computed_width(table, info.column, info.colspan),
        ))
        children = self.children_to_nodes(ancestry)
        if not children:
            # 셀에는 문단이 하나 이상 있어야 함
            children = [new_element("w", "p")]
        for child in children:
            tc.append(child)
        return tc

    def to_repeating_node(self, ancestry: Ancestry, x: int, y: int) -> etree._Element:
        """세로 병합으로 이어지는 (x, y) 자리의 자리 표시 셀"""
        table = self._table(ancestry)
        info = table.model.get_cell_info(self)
        tc = new_element("w", "tc")
        tc.append(cell_properties_to_node(
            self.props,
            as_repeating=True,
            width=self._computed_width(table, x, info.colspan),
        ))
        tc.append(new_element("w", "p"))
        return tc

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Cell":
        props = cell_properties_from_node(node.find("w:tcPr", NS))
        props.row_span = _row_span(node)
        children = [child for child in node if child.tag != tag("w", "tcPr")]
        return cls(props, *cls.children_from_nodes(children, context))
