"""속성 코덱 모듈

각 모듈은 속성 dataclass 와 *_to_node / *_from_node 함수 쌍을 제공합니다.
"""

from .change import ChangeInformation, change_information_from_node, set_change_attributes
from .shared import Border, Shading
from .text import TextProperties, text_properties_from_node, text_properties_to_node
from .section import (
    HeaderFooterReferences,
    PageMargin,
    SectionProperties,
    section_properties_from_node,
    section_properties_to_node,
)
from .paragraph import (
    Indentation,
    NumberingReference,
    ParagraphProperties,
    ParagraphPropertiesChange,
    Spacing,
    paragraph_properties_from_node,
    paragraph_properties_to_node,
)
from .table import (
    TableBorders,
    TableLook,
    TableProperties,
    table_grid_from_node,
    table_grid_to_node,
    table_properties_from_node,
    table_properties_to_node,
)
from .row import RowProperties, row_properties_from_node, row_properties_to_node
from .cell import CellBorders, CellProperties, cell_properties_from_node, cell_properties_to_node
from .table_conditional import (
    TABLE_CONDITION_TYPES,
    TableConditionalProperties,
    table_conditions_from_nodes,
    table_conditions_to_nodes,
)

__all__ = [
    "ChangeInformation", "change_information_from_node", "set_change_attributes",
    "Border", "Shading",
    "TextProperties", "text_properties_from_node", "text_properties_to_node",
    "HeaderFooterReferences", "PageMargin", "SectionProperties",
    "section_properties_from_node", "section_properties_to_node",
    "Indentation", "NumberingReference", "ParagraphProperties", "ParagraphPropertiesChange",
    "Spacing", "paragraph_properties_from_node", "paragraph_properties_to_node",
    "TableBorders", "TableLook", "TableProperties",
    "table_grid_from_node", "table_grid_to_node",
    "table_properties_from_node", "table_properties_to_node",
    "RowProperties", "row_properties_from_node", "row_properties_to_node",
    "CellBorders", "CellProperties", "cell_properties_from_node", "cell_properties_to_node",
    "TABLE_CONDITION_TYPES", "TableConditionalProperties",
    "table_conditions_from_nodes", "table_conditions_to_nodes",
]
