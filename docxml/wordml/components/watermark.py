"""머리글 워터마크 텍스트 (w:p/w:r/w:pict/v:shape)

VML 글상자(v:textpath) 를 페이지 기준으로 배치하고 반투명하게 채운다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from lxml import etree

from docxml.wordml.base import NS, new_element, qname, sub_element, tag
from docxml.wordml.component import Ancestry, Component, ComponentContext, register_component
from docxml.wordml.length import Length, cm, pt


DEFAULT_BOX_WIDTH = cm(21.6)
DEFAULT_BOX_HEIGHT = cm(23.9)
DEFAULT_FONT_SIZE = pt(10)

# WordArt 평문 모양
SHAPE_TYPE = "#_x0000_t136"
FILL_OPACITY = "52428f"


@dataclass(frozen=True)
class WatermarkTextProperties:
    """
    정렬은 left/center/right, top/center/bottom. color 는 16진수 RGB.
    """
    text: str
    horizontal_align: Optional[str] = None
    vertical_align: Optional[str] = None
    min_font_size: Optional[Length] = None
    box_width: Optional[Length] = None
    box_height: Optional[Length] = None
    color: Optional[str] = None


def _format_pt(length: Length) -> str:
    return f"{length.pt:g}pt"


def _parse_pt(value: Optional[str]) -> Optional[Length]:
    if not value or not value.endswith("pt"):
        return None
    try:
        return pt(float(value[:-2]))
    except ValueError:
        return None


def parse_css(value: Optional[str]) -> Dict[str, str]:
    """VML style 속성 ("a:1;b:2") 파싱"""
    declarations: Dict[str, str] = {}
    for declaration in (value or "").split(";"):
        key, sep, val = declaration.partition(":")
        if sep:
            declarations[key.strip()] = val.strip()
    return declarations


def format_css(declarations: Dict[str, str]) -> str:
    return ";".join(f"{key}:{value}" for key, value in declarations.items())


@register_component
class WatermarkText(Component):
    """페이지 가운데에 놓이는 워터마크 글자"""

    node_tag = tag("w", "p")

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return node.tag == cls.node_tag and node.find("w:r/w:pict/v:shape/v:textpath", NS) is not None

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        props = self.props
        shape_style = format_css({
            "position": "absolute",
            "margin-left": "0",
            "margin-top": "0",
            "width": _format_pt(props.box_width or DEFAULT_BOX_WIDTH),
            "height": _format_pt(props.box_height or DEFAULT_BOX_HEIGHT),
            "z-index": "-251651072",
            "mso-wrap-edited": "f",
            "mso-width-percent": "0",
            "mso-height-percent": "0",
            "mso-position-horizontal": props.horizontal_align or "center",
            "mso-position-horizontal-relative": "page",
            "mso-position-vertical": props.vertical_align or "center",
            "mso-position-vertical-relative": "page",
        })
        text_style = format_css({
            "font-family": '"Impact"',
            "font-size": _format_pt(props.min_font_size or DEFAULT_FONT_SIZE),
            "font-weight": "bold",
            "font-style": "italic",
        })

        p = new_element("w", "p")
        pict = sub_element(sub_element(p, "w", "r"), "w", "pict")
        shape = etree.SubElement(pict, qname("v", "shape"), {
            "type": SHAPE_TYPE,
            "style": shape_style,
            "fillcolor": f"#{props.color or '000000'}",
            "stroked": "f",
        })
        shape.set(qname("o", "allowincell"), "f")
        etree.SubElement(shape, qname("v", "fill"), {"opacity": FILL_OPACITY})
        etree.SubElement(shape, qname("v", "textpath"), {"style": text_style, "string": props.text})
        return p

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "WatermarkText":
        shape = node.find("w:r/w:pict/v:shape", NS)
        textpath = shape.find("v:textpath", NS)
        shape_style = parse_css(shape.get("style"))
        text_style = parse_css(textpath.get("style"))
        color = shape.get("fillcolor")
        return cls(WatermarkTextProperties(
            text=textpath.get("string", ""),
            horizontal_align=shape_style.get("mso-position-horizontal"),
            vertical_align=shape_style.get("mso-position-vertical"),
            min_font_size=_parse_pt(text_style.get("font-size")),
            box_width=_parse_pt(shape_style.get("width")),
            box_height=_parse_pt(shape_style.get("height")),
            color=color.lstrip("#") if color else None,
        ))
