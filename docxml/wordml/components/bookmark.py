"""책갈피 범위 (w:bookmarkStart, w:bookmarkEnd)

props 는 Bookmarks.create() 가 발급한 Bookmark 값이다.
"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from docxml.wordml.base import new_element, qname, tag, to_int, w_attr
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.identifiers import Bookmark


@register_component
class BookmarkRangeStart(Component):
    node_tag = tag("w", "bookmarkStart")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "bookmarkStart")
        elem.set(qname("w", "id"), str(self.props.id))
        elem.set(qname("w", "name"), self.props.name)
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "BookmarkRangeStart":
        return cls(Bookmark(id=to_int(w_attr(node, "id", "0")), name=w_attr(node, "name", "")))


@register_component
class BookmarkRangeEnd(Component):
    node_tag = tag("w", "bookmarkEnd")

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        elem = new_element("w", "bookmarkEnd")
        elem.set(qname("w", "id"), str(self.props.id))
        return elem

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "BookmarkRangeEnd":
        # 끝 표시에는 이름이 없음
        return cls(Bookmark(id=to_int(w_attr(node, "id", "0")), name=""))
