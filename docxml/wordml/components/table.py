"""표 (w:tbl)"""

from __future__ import annotations

import logging
from typing import Hashable, List, Optional

from lxml import etree

from docxml.wordml.base import NS, new_element, tag
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.properties.table import (
    TableProperties,
    table_grid_from_node,
    table_grid_to_node,
    table_properties_from_node,
    table_properties_to_node,
)
from docxml.wordml.tables import TableGridModel, grid_signature


logger = logging.getLogger(__name__)


@register_component
class Table(Component):
    """표

    model 은 행/셀 구성과 병합 범위가 바뀌면 다시 계산된다. 셀 속성을
    제자리에서 바꾼 경우에도 병합 범위가 같으면 캐시를 그대로 쓴다.
    """

    allowed_children = ("Row", "RowAddition", "RowDeletion")
    node_tag = tag("w", "tbl")
    props_class = TableProperties

    def __init__(self, props: Optional[TableProperties] = None, *children):
        super().__init__(props, *children)
        self._model: Optional[TableGridModel] = None
        self._model_signature: Optional[Hashable] = None

    @property
    def rows(self) -> List[Component]:
        return [child for child in self.children if isinstance(child, Component)]

    @property
    def model(self) -> TableGridModel:
        rows = self.rows
        signature = grid_signature(rows)
        if self._model is None or signature != self._model_signature:
            self._model = TableGridModel(rows)
            self._model_signature = signature
        return self._model

    def invalidate_model(self) -> None:
        self._model = None
        self._model_signature = None

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        self.model.is_rectangular()
        tbl = new_element("w", "tbl")
        tbl.append(table_properties_to_node(self.props))
        if self.props.column_widths:
            tbl.append(table_grid_to_node(self.props.column_widths))
        for row in self.children_to_nodes(ancestry):
            tbl.append(row)
        return tbl

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Table":
        props = table_properties_from_node(node.find("w:tblPr", NS))
        props.column_widths = table_grid_from_node(node.find("w:tblGrid", NS))
        return cls(props, *cls.children_from_nodes(node.findall("w:tr", NS), context))
