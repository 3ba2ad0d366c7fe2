"""구역 속성 (w:sectPr)

머리글/바닥글 참조는 관계 ID 로 기록한다. 문자열 하나를 주면 첫 페이지,
짝수 페이지, 기본(홀수) 페이지 모두 같은 머리글을 사용한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from lxml import etree

from docxml.wordml.base import NS, is_on, new_element, qname, sub_element, tag, to_int, w_attr
from docxml.wordml.length import Length, twip


# HeaderFooterReferences 필드 -> w:type 값
REFERENCE_TYPES: Dict[str, str] = {
    "first": "first",
    "even": "even",
    "odd": "default",
}

MARGIN_SIDES = ("top", "right", "bottom", "left", "header", "footer", "gutter")


@dataclass(frozen=True)
class HeaderFooterReferences:
    """페이지 종류별 머리글/바닥글 관계 ID"""
    first: Optional[str] = None
    even: Optional[str] = None
    odd: Optional[str] = None

    @classmethod
    def coerce(cls, value: Union[str, "HeaderFooterReferences", None]) -> Optional["HeaderFooterReferences"]:
        if value is None or isinstance(value, HeaderFooterReferences):
            return value
        return cls(first=value, even=value, odd=value)

    def ids(self):
        return [rid for rid in (self.first, self.even, self.odd) if rid]


@dataclass(frozen=True)
class PageMargin:
    """페이지 여백"""
    top: Optional[Length] = None
    right: Optional[Length] = None
    bottom: Optional[Length] = None
    left: Optional[Length] = None
    header: Optional[Length] = None
    footer: Optional[Length] = None
    gutter: Optional[Length] = None


@dataclass
class SectionProperties:
    """구역 설정"""
    headers: Union[str, HeaderFooterReferences, None] = None
    footers: Union[str, HeaderFooterReferences, None] = None
    page_width: Optional[Length] = None
    page_height: Optional[Length] = None
    page_orientation: Optional[str] = None
    page_margin: Optional[PageMargin] = None
    title_page: bool = False


def _twip_attr(elem: Optional[etree._Element], local: str) -> Optional[Length]:
    value = to_int(w_attr(elem, local))
    return twip(value) if value is not None else None


def _references_from_node(node: etree._Element, local: str) -> Optional[HeaderFooterReferences]:
    found = {}
    for ref in node.findall(f"w:{local}", NS):
        ref_type = w_attr(ref, "type", "default")
        for field_name, value in REFERENCE_TYPES.items():
            if value == ref_type:
                found[field_name] = ref.get(tag("r", "id"))
    return HeaderFooterReferences(**found) if found else None


def section_properties_from_node(node: Optional[etree._Element]) -> SectionProperties:
    """w:sectPr 파싱"""
    if node is None:
        return SectionProperties()
    pg_sz = node.find("w:pgSz", NS)
    pg_mar = node.find("w:pgMar", NS)
    return SectionProperties(
        headers=_references_from_node(node, "headerReference"),
        footers=_references_from_node(node, "footerReference"),
        page_width=_twip_attr(pg_sz, "w"),
        page_height=_twip_attr(pg_sz, "h"),
        page_orientation=w_attr(pg_sz, "orient"),
        page_margin=PageMargin(**{
            side: _twip_attr(pg_mar, side) for side in MARGIN_SIDES
        }) if pg_mar is not None else None,
        title_page=is_on(node.find("w:titlePg", NS)),
    )


def _references_to_node(sectpr: etree._Element, local: str, value) -> None:
    refs = HeaderFooterReferences.coerce(value)
    if refs is None:
        return
    for field_name, ref_type in REFERENCE_TYPES.items():
        rid = getattr(refs, field_name)
        if rid:
            ref = etree.SubElement(sectpr, qname("w", local))
            ref.set(qname("r", "id"), rid)
            ref.set(qname("w", "type"), ref_type)


def section_properties_to_node(props: Optional[SectionProperties] = None) -> etree._Element:
    """w:sectPr 생성"""
    props = props or SectionProperties()
    sectpr = new_element("w", "sectPr")
    _references_to_node(sectpr, "headerReference", props.headers)
    _references_to_node(sectpr, "footerReference", props.footers)

    if props.page_width is not None or props.page_height is not None or props.page_orientation:
        pg_sz = sub_element(sectpr, "w", "pgSz")
        if props.page_width is not None:
            pg_sz.set(qname("w", "w"), str(round(props.page_width.twip)))
        if props.page_height is not None:
            pg_sz.set(qname("w", "h"), str(round(props.page_height.twip)))
        if props.page_orientation:
            pg_sz.set(qname("w", "orient"), props.page_orientation)

    if props.page_margin is not None:
        pg_mar = sub_element(sectpr, "w", "pgMar")
        for side in MARGIN_SIDES:
            value = getattr(props.page_margin, side)
            if value is not None:
                pg_mar.set(qname("w", side), str(round(value.twip)))

    if props.title_page:
        sub_element(sectpr, "w", "titlePg", val="1")
    return sectpr
