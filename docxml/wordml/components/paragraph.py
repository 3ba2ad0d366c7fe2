"""문단 (w:p)"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from docxml.wordml.base import NS, new_element, tag
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.properties.paragraph import (
    ParagraphProperties,
    paragraph_properties_from_node,
    paragraph_properties_to_node,
)
from docxml.wordml.properties.section import SectionProperties


PARAGRAPH_CHILDREN = (
    "BookmarkRangeEnd",
    "BookmarkRangeStart",
    "Comment",
    "CommentRangeEnd",
    "CommentRangeStart",
    "Hyperlink",
    "Text",
    "TextAddition",
    "TextDeletion",
    "Field",
)


@register_component
class Paragraph(Component):
    """문단"""

    allowed_children = PARAGRAPH_CHILDREN
    node_tag = tag("w", "p")
    props_class = ParagraphProperties

    def to_node(
        self,
        ancestry: Ancestry = (),
        *,
        section_properties: Optional[SectionProperties] = None,
    ) -> etree._Element:
        """section_properties 가 주어지면 구역을 끝내는 문단으로 기록"""
        p = new_element("w", "p")
        ppr = paragraph_properties_to_node(self.props, section_properties)
        if len(ppr):
            p.append(ppr)
        for child in self.children_to_nodes(ancestry):
            p.append(child)
        return p

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Paragraph":
        children = [child for child in node if child.tag != tag("w", "pPr")]
        return cls(
            paragraph_properties_from_node(node.find("w:pPr", NS)),
            *cls.children_from_nodes(children, context),
        )
