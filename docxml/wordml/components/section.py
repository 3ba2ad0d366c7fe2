"""구역 (w:sectPr)

마지막 구역은 본문 끝의 w:sectPr 로, 나머지 구역은 구역의 마지막 문단
w:pPr 안의 w:sectPr 로 기록된다. 구역이 문단으로 끝나지 않으면 빈 문단을
덧붙여 구역 속성을 싣는다.
"""

from __future__ import annotations

from typing import List, Optional

from lxml import etree

from docxml.exceptions import MissingAncestorError
from docxml.wordml.base import NS, is_tag, tag
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.components.paragraph import Paragraph
from docxml.wordml.properties.section import (
    SectionProperties,
    section_properties_from_node,
    section_properties_to_node,
)


SECTION_CHILDREN = ("Table", "Paragraph", "BookmarkRangeStart", "BookmarkRangeEnd")


def ends_section(elem: etree._Element) -> bool:
    """w:pPr/w:sectPr 를 가진 문단인지"""
    return is_tag(elem, "w", "p") and elem.find("w:pPr/w:sectPr", NS) is not None


@register_component
class Section(Component):
    """구역"""

    allowed_children = SECTION_CHILDREN
    node_tag = tag("w", "sectPr")
    props_class = SectionProperties

    def to_node(self, ancestry: Ancestry = ()) -> List[etree._Element]:
        parent = ancestry[0] if ancestry else None
        siblings = getattr(parent, "children", None)
        if not siblings:
            raise MissingAncestorError("Cannot serialize a section without parent context")
        if siblings[-1] is self:
            return self.children_to_nodes(ancestry) + [section_properties_to_node(self.props)]

        anc = (self,) + tuple(ancestry)
        last = self.children[-1] if self.children else None
        if isinstance(last, Paragraph):
            nodes = self.children_to_nodes(ancestry, self.children[:-1])
            nodes.append(last.to_node(anc, section_properties=self.props))
        else:
            nodes = self.children_to_nodes(ancestry)
            nodes.append(Paragraph().to_node(anc, section_properties=self.props))
        return nodes

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Section":
        parent = node.getparent()
        if parent is not None and is_tag(parent, "w", "body"):
            # 본문 끝 구역: 마지막 구역 끝 문단 이후의 형제들
            children: List[etree._Element] = []
            for sibling in node.itersiblings(preceding=True):
                if ends_section(sibling):
                    break
                children.insert(0, sibling)
        else:
            # 문단 속성 안의 구역: 이전 구역 끝 문단 이후부터 이 문단까지
            paragraph = parent.getparent() if parent is not None else None
            children = [paragraph] if paragraph is not None else []
            if paragraph is not None:
                for sibling in paragraph.itersiblings(preceding=True):
                    if ends_section(sibling):
                        break
                    children.insert(0, sibling)
        return cls(
            section_properties_from_node(node),
            *cls.children_from_nodes(children, context),
        )
