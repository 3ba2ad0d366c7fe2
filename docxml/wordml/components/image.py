"""인라인 그림 (w:drawing/wp:inline)

그림 데이터는 word/media 아래 바이너리 파트로 기록되고, 소유 파트의 관계
(image) 를 r:embed 로 참조한다. SVG 를 함께 주면 PNG 등 대체 이미지와
함께 asvg:svgBlip 확장으로 기록한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

from lxml import etree

from docxml.exceptions import StructureError
from docxml.wordml.base import MEDIA_EXTENSIONS, NS, new_element, qname, sniff_media_type, tag, to_int
from docxml.wordml.component import Ancestry, Component, ComponentContext, PartRelationshipIds, register_component
from docxml.wordml.length import Length, emu
from docxml.wordml.package.enums import PartLocation, RelationshipType
from docxml.wordml.package.files import BinaryFile

if TYPE_CHECKING:
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)

# a:ext uri
EXTENSION_URIS: Dict[str, str] = {
    "use_local_dpi": "{28A0092B-C50C-407E-A947-70E740481C1C}",
    "svg": "{96DAC541-7B7A-43D3-8B79-37D633B846F1}",
}


@dataclass(frozen=True)
class ImageProperties:
    """그림 데이터와 표시 크기"""
    data: bytes
    width: Length
    height: Length
    title: Optional[str] = None
    alt: Optional[str] = None
    media_type: Optional[str] = None
    svg: Optional[str] = None


def _attrs(parent: etree._Element, prefix: str, local: str, **attrs: str) -> etree._Element:
    """네임스페이스 없는 속성을 가진 DrawingML 하위 요소"""
    return etree.SubElement(parent, qname(prefix, local), attrs)


@register_component
class Image(Component):
    """인라인 그림"""

    node_tag = tag("w", "drawing")

    def __init__(self, props: ImageProperties, *children):
        super().__init__(props, *children)
        self.location: Optional[str] = None
        self.svg_location: Optional[str] = None
        self.embed_ids = PartRelationshipIds()
        self.svg_embed_ids = PartRelationshipIds()
        self.drawing_id: Optional[int] = None

    @property
    def relationship_id(self) -> Optional[str]:
        return self.embed_ids.last

    @property
    def svg_relationship_id(self) -> Optional[str]:
        return self.svg_embed_ids.last

    @property
    def media_type(self) -> str:
        return self.props.media_type or sniff_media_type(self.props.data)

    def _ensure_media(self, relationships: "Relationships", location: str, data: bytes, media_type: str) -> str:
        existing = relationships.find(
            lambda meta: meta.type == RelationshipType.IMAGE and meta.target == location
        )
        if existing is not None:
            return existing.id
        return relationships.add(RelationshipType.IMAGE, BinaryFile(location, data, media_type))

    def ensure_relationship(self, relationships: "Relationships") -> None:
        allocator = relationships.allocator
        if self.location is None:
            extension = MEDIA_EXTENSIONS.get(self.media_type, "bin")
            self.location = f"{PartLocation.MEDIA.value}/{allocator.random_id('img')}.{extension}"
        self.embed_ids.set(
            relationships,
            self._ensure_media(relationships, self.location, self.props.data, self.media_type),
        )

        if self.props.svg is not None:
            if self.svg_location is None:
                self.svg_location = f"{PartLocation.MEDIA.value}/{allocator.random_id('svg')}.svg"
            self.svg_embed_ids.set(
                relationships,
                self._ensure_media(relationships, self.svg_location, self.props.svg.encode("utf-8"), "image/svg+xml"),
            )

        if self.drawing_id is None:
            self.drawing_id = allocator.next_numeric_id()

    def to_node(self, ancestry: Ancestry = ()) -> etree._Element:
        embed_id = self.embed_ids.get(ancestry)
        if not embed_id or self.drawing_id is None:
            raise StructureError("Cannot serialize an image outside the context of a document")
        svg_embed_id = self.svg_embed_ids.get(ancestry) if self.props.svg is not None else None

        width = str(round(self.props.width.emu))
        height = str(round(self.props.height.emu))
        name = self.props.title or ""
        descr = self.props.alt or ""

        drawing = new_element("w", "drawing")
        inline = _attrs(drawing, "wp", "inline")
        _attrs(inline, "wp", "extent", cx=width, cy=height)
        _attrs(inline, "wp", "docPr", id=str(self.drawing_id), name=name, descr=descr)
        frame = _attrs(inline, "wp", "cNvGraphicFramePr")
        _attrs(frame, "a", "graphicFrameLocks", noChangeAspect="1")

        graphic = _attrs(inline, "a", "graphic")
        data = _attrs(graphic, "a", "graphicData", uri=NS["pic"])
        pic = _attrs(data, "pic", "pic")
        nv_pic_pr = _attrs(pic, "pic", "nvPicPr")
        _attrs(nv_pic_pr, "pic", "cNvPr", id=str(self.drawing_id), name=name, descr=descr)
        _attrs(nv_pic_pr, "pic", "cNvPicPr")

        blip_fill = _attrs(pic, "pic", "blipFill")
        blip = _attrs(blip_fill, "a", "blip", cstate="print")
        blip.set(qname("r", "embed"), embed_id)
        if svg_embed_id:
            ext_lst = _attrs(blip, "a", "extLst")
            dpi = _attrs(ext_lst, "a", "ext", uri=EXTENSION_URIS["use_local_dpi"])
            _attrs(dpi, "a14", "useLocalDpi", val="0")
            svg_ext = _attrs(ext_lst, "a", "ext", uri=EXTENSION_URIS["svg"])
            svg_blip = _attrs(svg_ext, "asvg", "svgBlip")
            svg_blip.set(qname("r", "embed"), svg_embed_id)
        stretch = _attrs(blip_fill, "a", "stretch")
        _attrs(stretch, "a", "fillRect")

        sp_pr = _attrs(pic, "pic", "spPr")
        xfrm = _attrs(sp_pr, "a", "xfrm")
        _attrs(xfrm, "a", "off", x="0", y="0")
        _attrs(xfrm, "a", "ext", cx=width, cy=height)
        geom = _attrs(sp_pr, "a", "prstGeom", prst="rect")
        _attrs(geom, "a", "avLst")
        return drawing

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Image":
        if context is None or context.relationships is None or context.archive is None:
            raise StructureError("Failed to load image, no relationships or archive in context")

        inline = node.find("wp:inline", NS)
        if inline is None:
            inline = node.find("wp:anchor", NS)
        if inline is None:
            raise StructureError("Failed to load image, no inline or anchored drawing found")
        blip = inline.find("a:graphic/a:graphicData/pic:pic/pic:blipFill/a:blip", NS)
        if blip is None:
            raise StructureError("Failed to load image, no blip found inside a blipFill")

        location = context.relationships.get_target(blip.get(tag("r", "embed")))
        svg_location = None
        svg = None
        svg_blip = blip.find(f"a:extLst/a:ext[@uri='{EXTENSION_URIS['svg']}']/asvg:svgBlip", NS)
        if svg_blip is not None:
            svg_location = context.relationships.get_target(svg_blip.get(tag("r", "embed")))
            svg = context.archive.read_text(svg_location)

        extent = inline.find("wp:extent", NS)
        doc_pr = inline.find("wp:docPr", NS)
        image = cls(ImageProperties(
            data=context.archive.read_binary(location),
            width=emu(to_int(extent.get("cx")) or 0) if extent is not None else emu(0),
            height=emu(to_int(extent.get("cy")) or 0) if extent is not None else emu(0),
            title=doc_pr.get("name") or None if doc_pr is not None else None,
            alt=doc_pr.get("descr") or None if doc_pr is not None else None,
            svg=svg,
        ))
        image.location = location
        image.svg_location = svg_location
        logger.debug("Loaded image %s", location)
        return image
