"""하이퍼링크 (w:hyperlink)

외부 URL 은 문서 관계(TargetMode="External")로 등록하고 r:id 로 참조한다.
anchor 또는 bookmark 는 문서 안의 책갈피를 가리킨다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from lxml import etree

from docxml.exceptions import StructureError
from docxml.wordml.base import new_element, qname, tag, w_attr
from docxml.wordml.component import Ancestry, Component, ComponentContext, PartRelationshipIds, register_component
from docxml.wordml.identifiers import Bookmark
from docxml.wordml.package.enums import RelationshipType

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HyperlinkProperties:
    url: Optional[str] = None
    anchor: Optional[str] = None
    bookmark: Optional[Bookmark] = None
    tooltip: Optional[str] = None


@register_component
class Hyperlink(Component):
    """하이퍼링크"""

    allowed_children = ("Text", "Field")
    node_tag = tag("w", "hyperlink")
    props_class = HyperlinkProperties

    def __init__(self, props: Optional[HyperlinkProperties] = None, *children):
        super().__init__(props, *children)
        self.relationship_ids = PartRelationshipIds()

    @property
    def relationship_id(self) -> Optional[str]:
        return self.relationship_ids.last

    def ensure_relationship(self, relationships: "Relationships") -> None:
        url = self.props.url
        if not url:
            return
        existing = relationships.find(
            lambda meta: meta.type == RelationshipType.HYPERLINK and meta.target == url
        )
        rid = existing.id if existing is not None else relationships.add(RelationshipType.HYPERLINK, url)
        self.relationship_ids.set(relationships, rid)

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        link = new_element("w", "hyperlink")
        if self.props.url:
            rid = self.relationship_ids.get(ancestry)
            if not rid:
                raise StructureError(
                    f'Hyperlink to "{self.props.url}" has no relationship',
                    "ensure_relationship() must run before serializing",
                )
            link.set(qname("r", "id"), rid)
        anchor = self.props.bookmark.name if self.props.bookmark else self.props.anchor
        if anchor:
            link.set(qname("w", "anchor"), anchor)
        if self.props.tooltip:
            link.set(qname("w", "tooltip"), self.props.tooltip)
        for child in self.children_to_nodes(ancestry):
            link.append(child)
        return link

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Hyperlink":
        rid = node.get(tag("r", "id"))
        url = None
        if rid and context is not None and context.relationships is not None:
            url = context.relationships.get_target(rid)
        elif rid:
            logger.debug("No relationships to resolve hyperlink %s", rid)
        hyperlink = cls(
            HyperlinkProperties(
                url=url,
                anchor=w_attr(node, "anchor"),
                tooltip=w_attr(node, "tooltip"),
            ),
            *cls.children_from_nodes(list(node), context),
        )
        if url:
            hyperlink.relationship_ids.set(context.relationships, rid)
        return hyperlink
