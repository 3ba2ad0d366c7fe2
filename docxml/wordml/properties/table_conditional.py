"""표 스타일 조건부 서식 (w:tblStylePr)

표 스타일 안에서 첫 행, 줄무늬 행 같은 영역별 셀 모양을 지정한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from lxml import etree

from docxml.wordml.base import NS, new_element, qname, w_attr
from docxml.wordml.properties.cell import CellProperties, cell_properties_from_node, cell_properties_to_node


# w:tblStylePr/@w:type 값 (스키마 순서)
TABLE_CONDITION_TYPES = (
    "wholeTable",
    "firstRow",
    "lastRow",
    "firstCol",
    "lastCol",
    "band1Vert",
    "band2Vert",
    "band1Horz",
    "band2Horz",
    "neCell",
    "nwCell",
    "seCell",
    "swCell",
)


@dataclass
class TableConditionalProperties:
    """조건 하나에 적용되는 셀 모양"""
    cells: Optional[CellProperties] = None


def table_conditional_properties_from_node(node: etree._Element) -> TableConditionalProperties:
    tcpr = node.find("w:tcPr", NS)
    return TableConditionalProperties(
        cells=cell_properties_from_node(tcpr) if tcpr is not None else None,
    )


def table_conditional_properties_to_node(type: str, props: TableConditionalProperties) -> etree._Element:
    if type not in TABLE_CONDITION_TYPES:
        raise ValueError(f'Unknown table style condition "{type}"')
    elem = new_element("w", "tblStylePr")
    elem.set(qname("w", "type"), type)
    if props.cells is not None:
        elem.append(cell_properties_to_node(props.cells))
    return elem


def table_conditions_from_nodes(nodes: List[etree._Element]) -> Dict[str, TableConditionalProperties]:
    """w:tblStylePr 목록을 조건 이름별 사전으로 (알 수 없는 조건은 건너뜀)"""
    conditions: Dict[str, TableConditionalProperties] = {}
    for node in nodes:
        type = w_attr(node, "type")
        if type in TABLE_CONDITION_TYPES:
            conditions[type] = table_conditional_properties_from_node(node)
    return conditions


def table_conditions_to_nodes(conditions: Dict[str, TableConditionalProperties]) -> List[etree._Element]:
    """스키마 순서로 정렬한 w:tblStylePr 목록"""
    unknown = sorted(set(conditions) - set(TABLE_CONDITION_TYPES))
    if unknown:
        raise ValueError(f"Unknown table style conditions: {', '.join(unknown)}")
    return [
        table_conditional_properties_to_node(type, conditions[type])
        for type in TABLE_CONDITION_TYPES
        if type in conditions
    ]
