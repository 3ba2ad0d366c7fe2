"""WordprocessingML 공통 유틸리티 및 네임스페이스 정의"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from lxml import etree


# OOXML 네임스페이스
NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "pic": "http://schemas.openxmlformats.org/drawingml/2006/picture",
    "w14": "http://schemas.microsoft.com/office/word/2010/wordml",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "a14": "http://schemas.microsoft.com/office/drawing/2010/main",
    "asvg": "http://schemas.microsoft.com/office/drawing/2016/SVG/main",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
    "op": "http://schemas.openxmlformats.org/officeDocument/2006/custom-properties",
    "vt": "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes",
    "v": "urn:schemas-microsoft-com:vml",
    "o": "urn:schemas-microsoft-com:office:office",
}

XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

# 문서 파트 루트에 선언하는 접두사
PART_NSMAP: Dict[str, str] = {
    prefix: NS[prefix] for prefix in ("w", "r", "wp", "a", "pic", "w14", "mc")
}

_OFF_VALUES = ("0", "false", "off")


def is_tag(elem: etree._Element, prefix: str, local: str) -> bool:
    """XML 요소의 태그 이름 확인"""
    return elem.tag == f"{{{NS[prefix]}}}{local}"


def qname(prefix: str, local: str) -> etree.QName:
    """네임스페이스 QName 생성"""
    return etree.QName(NS[prefix], local)


def tag(prefix: str, local: str) -> str:
    """Clark 표기 태그 문자열"""
    return f"{{{NS[prefix]}}}{local}"


def new_element(prefix: str, local: str) -> etree._Element:
    """독립 요소 생성 (부모에 붙을 때 중복 선언은 lxml이 정리)"""
    return etree.Element(qname(prefix, local), nsmap=PART_NSMAP)


def sub_element(parent: etree._Element, prefix: str, local: str, **attrs: str) -> etree._Element:
    """w:val 같은 네임스페이스 속성을 가진 하위 요소 생성"""
    child = etree.SubElement(parent, qname(prefix, local))
    for key, value in attrs.items():
        child.set(qname(prefix, key), value)
    return child


def w_attr(elem: Optional[etree._Element], local: str, default: Optional[str] = None) -> Optional[str]:
    """w: 네임스페이스 속성 값"""
    if elem is None:
        return default
    return elem.get(tag("w", local), default)


def child_val(elem: Optional[etree._Element], local: str) -> Optional[str]:
    """./w:{local}/@w:val"""
    if elem is None:
        return None
    return w_attr(elem.find(f"w:{local}", NS), "val")


def to_int(value: Optional[str]) -> Optional[int]:
    """OOXML 숫자 속성 파싱 ("240", "240.0" 모두 허용)"""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return int(float(value))


def is_on(elem: Optional[etree._Element]) -> bool:
    """CT_OnOff 요소 해석 (요소가 있고 w:val이 off가 아니면 True)"""
    if elem is None:
        return False
    return w_attr(elem, "val", "1").lower() not in _OFF_VALUES


def on_off_attr(value: Optional[str]) -> Optional[bool]:
    """ST_OnOff 속성 해석"""
    if value is None:
        return None
    return value.lower() not in _OFF_VALUES


def format_datetime(value: datetime) -> str:
    """ISO 8601 (UTC, 초 단위) 문자열"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_datetime(value: str) -> datetime:
    """w:date 값 파싱"""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def guess_media_type(filename: str) -> str:
    """파일 확장자로 미디어 타입 추측"""
    lower = filename.lower()
    if lower.endswith(".jpg") or lower.endswith(".jpeg"):
        return "image/jpeg"
    if lower.endswith(".png"):
        return "image/png"
    if lower.endswith(".gif"):
        return "image/gif"
    if lower.endswith(".bmp"):
        return "image/bmp"
    if lower.endswith(".svg"):
        return "image/svg+xml"
    return "application/octet-stream"


def sniff_media_type(data: bytes) -> str:
    """매직 바이트로 이미지 미디어 타입 판별"""
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"GIF87a") or data.startswith(b"GIF89a"):
        return "image/gif"
    if data.startswith(b"BM"):
        return "image/bmp"
    if data.lstrip()[:5] in (b"<?xml", b"<svg ") or b"<svg" in data[:256]:
        return "image/svg+xml"
    return "application/octet-stream"


MEDIA_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/svg+xml": "svg",
}


def serialize(root: etree._Element) -> bytes:
    """파트 XML 직렬화"""
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", standalone=True)
