"""텍스트 런 (w:r) 과 런 안의 인라인 요소"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from docxml.wordml.base import NS, XML_SPACE, is_tag, new_element, qname, tag, w_attr
from docxml.wordml.component import (
    Ancestry,
    Component,
    ComponentContext,
    find_ancestor,
    register_component,
)
from docxml.wordml.components.changes import TextDeletion
from docxml.wordml.properties.text import (
    TextProperties,
    text_properties_from_node,
    text_properties_to_node,
)


@register_component
class Text(Component):
    """텍스트 런, 문자열 자식은 w:t 로 기록"""

    allowed_children = (
        "Break",
        "FieldRangeEnd",
        "FieldRangeInstruction",
        "FieldRangeSeparator",
        "FieldRangeStart",
        "Image",
        "NonBreakingHyphen",
        "Symbol",
        "Tab",
    )
    mixed = True
    node_tag = tag("w", "r")
    props_class = TextProperties

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        text_local = "delText" if find_ancestor(ancestry, TextDeletion) else "t"
        anc = (self,) + tuple(ancestry)

        run = new_element("w", "r")
        rpr = text_properties_to_node(self.props)
        if len(rpr):
            run.append(rpr)
        for child in self.children:
            if isinstance(child, str):
                t = etree.SubElement(run, qname("w", text_local))
                t.set(XML_SPACE, "preserve")
                t.text = child
            else:
                run.append(child.to_node(anc))
        return run

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        # 주석 참조 런은 Comment 컴포넌트
        return node.tag == cls.node_tag and node.find("w:commentReference", NS) is None

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Text":
        nodes = []
        for child in node:
            if is_tag(child, "w", "rPr"):
                continue
            if is_tag(child, "w", "t") or is_tag(child, "w", "delText"):
                if child.text:
                    nodes.append(child.text)
                continue
            nodes.append(child)
        return cls(
            text_properties_from_node(node.find("w:rPr", NS)),
            *cls.children_from_nodes(nodes, context),
        )


@dataclass(frozen=True)
class BreakProperties:
    # page, column, textWrapping
    type: Optional[str] = None
    clear: Optional[str] = None


@register_component
class Break(Component):
    """줄/페이지/단 나누기"""

    node_tag = tag("w", "br")
    props_class = BreakProperties

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        br = new_element("w", "br")
        if self.props.type:
            br.set(qname("w", "type"), self.props.type)
        if self.props.clear:
            br.set(qname("w", "clear"), self.props.clear)
        return br

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Break":
        return cls(BreakProperties(type=w_attr(node, "type"), clear=w_attr(node, "clear")))


@register_component
class Tab(Component):
    node_tag = tag("w", "tab")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        return new_element("w", "tab")

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Tab":
        return cls()


@register_component
class NonBreakingHyphen(Component):
    node_tag = tag("w", "noBreakHyphen")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        return new_element("w", "noBreakHyphen")

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "NonBreakingHyphen":
        return cls()


@dataclass(frozen=True)
class SymbolProperties:
    """기호 글꼴과 문자 코드 (16진수 문자열)"""
    font: Optional[str] = None
    char: Optional[str] = None


@register_component
class Symbol(Component):
    """기호 문자 (w:sym)"""

    node_tag = tag("w", "sym")
    props_class = SymbolProperties

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        sym = new_element("w", "sym")
        if self.props.font:
            sym.set(qname("w", "font"), self.props.font)
        if self.props.char:
            sym.set(qname("w", "char"), self.props.char)
        return sym

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Symbol":
        return cls(SymbolProperties(font=w_attr(node, "font"), char=w_attr(node, "char")))
