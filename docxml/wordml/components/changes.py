"""변경 추적 텍스트 (w:ins, w:del)"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from docxml.wordml.base import NS, new_element, tag
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.properties.change import (
    ChangeInformation,
    change_information_from_node,
    set_change_attributes,
)


class _TrackedChange(Component):
    """w:ins / w:del 공통 동작"""

    local_name = ""

    def __init__(self, props: ChangeInformation, *children):
        super().__init__(props, *children)

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = set_change_attributes(new_element("w", self.local_name), self.props)
        for child in self.children_to_nodes(ancestry):
            elem.append(child)
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "_TrackedChange":
        return cls(
            change_information_from_node(node),
            *cls.children_from_nodes(list(node), context),
        )


@register_component
class TextAddition(_TrackedChange):
    """추가된 텍스트"""

    allowed_children = ("Text",)
    node_tag = tag("w", "ins")
    local_name = "ins"


@register_component
class TextDeletion(_TrackedChange):
    """삭제된 텍스트 (하위 Text 는 w:delText 로 기록)"""

    allowed_children = ("Text", "TextAddition")
    node_tag = tag("w", "del")
    local_name = "del"
