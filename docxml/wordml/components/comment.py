"""주석 참조와 주석 범위 표시"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from docxml.exceptions import MissingReferenceError
from docxml.wordml.base import NS, new_element, sub_element, tag, to_int, w_attr
from docxml.wordml.component import (
    Ancestry,
    Component,
    ComponentContext,
    find_ancestor,
    register_component,
)


@dataclass(frozen=True)
class CommentProperties:
    """주석 ID (Comments 파트에서 발급)"""
    id: int


def _comment_id(node: etree._Element) -> CommentProperties:
    return CommentProperties(id=to_int(w_attr(node, "id", "0")))


@register_component
class Comment(Component):
    """주석 참조 런 (w:r/w:commentReference)"""

    node_tag = tag("w", "r")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        from docxml.wordml.package.document import DocumentXml

        document = find_ancestor(ancestry, DocumentXml)
        comments = document.comments if document is not None else None
        if comments is None or not comments.has(self.props.id):
            raise MissingReferenceError(f'Comment "{self.props.id}" does not exist')

        run = new_element("w", "r")
        rpr = sub_element(run, "w", "rPr")
        sub_element(rpr, "w", "rStyle", val="CommentReference")
        sub_element(run, "w", "commentReference", id=str(self.props.id))
        return run

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return node.tag == cls.node_tag and node.find("w:commentReference", NS) is not None

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Comment":
        return cls(_comment_id(node.find("w:commentReference", NS)))


@register_component
class CommentRangeStart(Component):
    node_tag = tag("w", "commentRangeStart")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "commentRangeStart")
        elem.set(tag("w", "id"), str(self.props.id))
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "CommentRangeStart":
        return cls(_comment_id(node))


@register_component
class CommentRangeEnd(Component):
    node_tag = tag("w", "commentRangeEnd")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "commentRangeEnd")
        elem.set(tag("w", "id"), str(self.props.id))
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "CommentRangeEnd":
        return cls(_comment_id(node))
