"""필드 (w:fldSimple) 와 복합 필드 표시 (w:fldChar, w:instrText)"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from docxml.wordml.base import XML_SPACE, new_element, on_off_attr, qname, tag, w_attr
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component


@dataclass(frozen=True)
class FieldProperties:
    instruction: str = ""
    is_dirty: bool = False
    is_locked: bool = False


@register_component
class Field(Component):
    """단순 필드 (예: PAGE, DATE)"""

    allowed_children = (
        "BookmarkRangeStart",
        "BookmarkRangeEnd",
        "CommentRangeStart",
        "CommentRangeEnd",
        "TextDeletion",
        "TextAddition",
        "Text",
        "Hyperlink",
    )
    node_tag = tag("w", "fldSimple")
    props_class = FieldProperties

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        fld = new_element("w", "fldSimple")
        fld.set(qname("w", "instr"), self.props.instruction)
        if self.props.is_dirty:
            fld.set(qname("w", "dirty"), "1")
        if self.props.is_locked:
            fld.set(qname("w", "fldLock"), "1")
        for child in self.children_to_nodes(ancestry):
            fld.append(child)
        return fld

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Field":
        return cls(
            FieldProperties(
                instruction=w_attr(node, "instr", ""),
                is_dirty=bool(on_off_attr(w_attr(node, "dirty"))),
                is_locked=bool(on_off_attr(w_attr(node, "fldLock"))),
            ),
            *cls.children_from_nodes(list(node), context),
        )


@dataclass(frozen=True)
class FieldCharProperties:
    is_dirty: bool = False
    is_locked: bool = False


class _FieldChar(Component):
    """w:fldChar, w:fldCharType 으로 구분"""

    node_tag = tag("w", "fldChar")
    props_class = FieldCharProperties
    char_type = ""

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "fldChar")
        elem.set(qname("w", "fldCharType"), self.char_type)
        if self.props.is_dirty:
            elem.set(qname("w", "dirty"), "1")
        if self.props.is_locked:
            elem.set(qname("w", "fldLock"), "1")
        return elem

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return node.tag == cls.node_tag and w_attr(node, "fldCharType") == cls.char_type

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "_FieldChar":
        return cls(FieldCharProperties(
            is_dirty=bool(on_off_attr(w_attr(node, "dirty"))),
            is_locked=bool(on_off_attr(w_attr(node, "fldLock"))),
        ))


@register_component
class FieldRangeStart(_FieldChar):
    char_type = "begin"


@register_component
class FieldRangeSeparator(_FieldChar):
    char_type = "separate"


@register_component
class FieldRangeEnd(_FieldChar):
    char_type = "end"


@register_component
class FieldRangeInstruction(Component):
    """복합 필드 명령 (w:instrText), 문자열 자식"""

    mixed = True
    node_tag = tag("w", "instrText")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "instrText")
        elem.set(XML_SPACE, "preserve")
        elem.text = "".join(child for child in self.children if isinstance(child, str))
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "FieldRangeInstruction":
        return cls(None, node.text or "")
