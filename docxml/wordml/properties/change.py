"""변경 추적 메타데이터 (w:ins, w:del, w:pPrChange 공통 속성)"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from lxml import etree

from docxml.exceptions import StructureError
from docxml.wordml.base import format_datetime, parse_datetime, qname, w_attr


@dataclass(frozen=True)
class ChangeInformation:
    """변경 식별자, 작성자, 일시"""
    id: int
    author: str
    date: datetime


def change_information_from_node(node: Optional[etree._Element]) -> ChangeInformation:
    """변경 추적 요소에서 메타데이터 추출"""
    if node is None:
        raise StructureError("Unexpectedly missing node with change information")
    date = w_attr(node, "date")
    return ChangeInformation(
        id=int(w_attr(node, "id", "0")),
        author=w_attr(node, "author", ""),
        date=parse_datetime(date) if date else datetime.fromtimestamp(0, tz=timezone.utc),
    )


def set_change_attributes(elem: etree._Element, change: ChangeInformation) -> etree._Element:
    elem.set(qname("w", "id"), str(change.id))
    elem.set(qname("w", "author"), change.author)
    elem.set(qname("w", "date"), format_datetime(change.date))
    return elem
