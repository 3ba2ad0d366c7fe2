"""관계 타입별 파트 로더"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from docxml.exceptions import UnhandledRelationshipError
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, RelationshipType
from docxml.wordml.package.files import BinaryFile, PackagePart, UnhandledXmlFile


logger = logging.getLogger(__name__)

# 해석하지 않고 원본 그대로 보존하는 파트
UNHANDLED_CONTENT_TYPES: Dict[RelationshipType, ContentType] = {
    RelationshipType.FONT_TABLE: ContentType.FONT_TABLE,
    RelationshipType.THEME: ContentType.THEME,
    RelationshipType.WEB_SETTINGS: ContentType.WEB_SETTINGS,
    RelationshipType.ENDNOTES: ContentType.ENDNOTES,
    RelationshipType.FOOTNOTES: ContentType.FOOTNOTES,
    RelationshipType.CORE_PROPERTIES: ContentType.CORE_PROPERTIES,
    RelationshipType.EXTENDED_PROPERTIES: ContentType.EXTENDED_PROPERTIES,
    RelationshipType.CUSTOM_XML: ContentType.XML,
    RelationshipType.COMMENTS_IDS: ContentType.COMMENTS_IDS,
    RelationshipType.COMMENTS_EXTENDED: ContentType.COMMENTS_EXTENDED,
    RelationshipType.PEOPLE: ContentType.PEOPLE,
}


def load_part(
    archive: Archive,
    rel_type: RelationshipType,
    location: str,
    allocator: Optional[IdAllocator] = None,
) -> PackagePart:
    """관계 대상 파트 로드"""
    from docxml.wordml.package.comments import Comments
    from docxml.wordml.package.custom_properties import CustomProperties
    from docxml.wordml.package.document import DocumentXml
    from docxml.wordml.package.header_footer import FooterXml, HeaderXml
    from docxml.wordml.package.numbering import Numbering
    from docxml.wordml.package.settings import Settings
    from docxml.wordml.package.styles import Styles

    logger.debug("Loading %s part %s", rel_type.name, location)

    if rel_type == RelationshipType.OFFICE_DOCUMENT:
        return DocumentXml.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.STYLES:
        return Styles.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.SETTINGS:
        return Settings.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.NUMBERING:
        return Numbering.from_archive(archive, location)
    if rel_type == RelationshipType.COMMENTS:
        return Comments.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.HEADER:
        return HeaderXml.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.FOOTER:
        return FooterXml.from_archive(archive, location, allocator)
    if rel_type == RelationshipType.CUSTOM_PROPERTIES:
        return CustomProperties.from_archive(archive, location)
    if rel_type == RelationshipType.IMAGE:
        return BinaryFile.from_archive(archive, location)
    if rel_type in UNHANDLED_CONTENT_TYPES:
        return UnhandledXmlFile.from_archive(archive, location, UNHANDLED_CONTENT_TYPES[rel_type].value)
    raise UnhandledRelationshipError(
        f'Unhandled relationship type "{rel_type.value}"',
        f"internal target {location}",
    )
