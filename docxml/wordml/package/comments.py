"""주석 파트 (word/comments.xml)"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator, List, Optional

from lxml import etree

from docxml.wordml.base import NS, format_datetime, new_element, parse_datetime, sub_element, to_int, w_attr
from docxml.wordml.component import Component, ComponentContext
from docxml.wordml.components.paragraph import Paragraph
from docxml.wordml.identifiers import IdAllocator, NumberMap
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFileWithRelationships, relationships_location

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)


@dataclass
class CommentDefinition:
    """주석 하나와 그 내용 문단"""
    id: int
    author: str
    initials: str
    date: datetime
    contents: List[Paragraph] = field(default_factory=list)


class Comments(XmlFileWithRelationships):
    """주석 목록 (ID 는 0 부터)"""

    content_type = ContentType.COMMENTS.value

    def __init__(
        self,
        location: str = PartLocation.COMMENTS.value,
        relationships: Optional["Relationships"] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        super().__init__(location, relationships, allocator)
        self._comments: NumberMap[CommentDefinition] = NumberMap(0)

    def is_empty(self) -> bool:
        return not len(self._comments)

    def add(self, author: str, initials: str, date: datetime, contents: List[Paragraph]) -> int:
        """주석 추가 후 ID 반환"""
        comment_id = self._comments.get_next_available_key()
        self._comments.set(comment_id, CommentDefinition(comment_id, author, initials, date, list(contents)))
        return comment_id

    def has(self, comment_id: int) -> bool:
        return self._comments.has(comment_id)

    def get(self, comment_id: int) -> Optional[CommentDefinition]:
        return self._comments.get(comment_id)

    @property
    def comments(self) -> List[CommentDefinition]:
        return self._comments.array()

    def iter_components(self) -> Iterator[Component]:
        for comment in self._comments.array():
            for paragraph in comment.contents:
                yield from paragraph.iter_components()

    def to_node(self) -> etree._Element:
        root = new_element("w", "comments")
        for comment in self._comments.array():
            elem = sub_element(
                root, "w", "comment",
                id=str(comment.id),
                author=comment.author,
                initials=comment.initials,
                date=format_datetime(comment.date),
            )
            for paragraph in comment.contents:
                elem.append(paragraph.to_node((self,)))
        return root

    @classmethod
    def from_archive(cls, archive: Archive, location: str, allocator: Optional[IdAllocator] = None) -> "Comments":
        from docxml.wordml.package.relationships import Relationships

        rels_location = relationships_location(location)
        relationships = (
            Relationships.from_archive(archive, rels_location, allocator)
            if archive.has_file(rels_location)
            else None
        )
        comments = cls(location, relationships, allocator)
        context = ComponentContext(archive=archive, relationships=comments.relationships)
        for elem in archive.read_xml(location).findall("w:comment", NS):
            comment_id = to_int(w_attr(elem, "id", "0"))
            date = w_attr(elem, "date")
            comments._comments.set(comment_id, CommentDefinition(
                id=comment_id,
                author=w_attr(elem, "author", ""),
                initials=w_attr(elem, "initials", ""),
                date=parse_datetime(date) if date else datetime.fromtimestamp(0, timezone.utc),
                contents=[Paragraph.from_node(p, context) for p in elem.findall("w:p", NS)],
            ))
        return comments
