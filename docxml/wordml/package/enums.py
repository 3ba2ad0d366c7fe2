"""OOXML 패키지 상수 (콘텐츠 타입, 관계 타입, 기본 파트 위치)"""

from enum import Enum


_WORDML = "application/vnd.openxmlformats-officedocument.wordprocessingml"
_OFFICE_RELS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"


class ContentType(str, Enum):
    """파트 콘텐츠 타입"""
    RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
    XML = "application/xml"
    MAIN_DOCUMENT = f"{_WORDML}.document.main+xml"
    TEMPLATE = f"{_WORDML}.template.main+xml"
    STYLES = f"{_WORDML}.styles+xml"
    SETTINGS = f"{_WORDML}.settings+xml"
    NUMBERING = f"{_WORDML}.numbering+xml"
    COMMENTS = f"{_WORDML}.comments+xml"
    COMMENTS_EXTENDED = f"{_WORDML}.commentsExtended+xml"
    COMMENTS_IDS = f"{_WORDML}.commentsIds+xml"
    PEOPLE = f"{_WORDML}.people+xml"
    HEADER = f"{_WORDML}.header+xml"
    FOOTER = f"{_WORDML}.footer+xml"
    FONT_TABLE = f"{_WORDML}.fontTable+xml"
    WEB_SETTINGS = f"{_WORDML}.webSettings+xml"
    ENDNOTES = f"{_WORDML}.endnotes+xml"
    FOOTNOTES = f"{_WORDML}.footnotes+xml"
    THEME = "application/vnd.openxmlformats-officedocument.theme+xml"
    CORE_PROPERTIES = "application/vnd.openxmlformats-package.core-properties+xml"
    EXTENDED_PROPERTIES = "application/vnd.openxmlformats-officedocument.extended-properties+xml"
    CUSTOM_PROPERTIES = "application/vnd.openxmlformats-officedocument.custom-properties+xml"


class RelationshipType(str, Enum):
    """관계 타입 URI"""
    OFFICE_DOCUMENT = f"{_OFFICE_RELS}/officeDocument"
    STYLES = f"{_OFFICE_RELS}/styles"
    SETTINGS = f"{_OFFICE_RELS}/settings"
    NUMBERING = f"{_OFFICE_RELS}/numbering"
    COMMENTS = f"{_OFFICE_RELS}/comments"
    HEADER = f"{_OFFICE_RELS}/header"
    FOOTER = f"{_OFFICE_RELS}/footer"
    IMAGE = f"{_OFFICE_RELS}/image"
    HYPERLINK = f"{_OFFICE_RELS}/hyperlink"
    ATTACHED_TEMPLATE = f"{_OFFICE_RELS}/attachedTemplate"
    FONT_TABLE = f"{_OFFICE_RELS}/fontTable"
    THEME = f"{_OFFICE_RELS}/theme"
    WEB_SETTINGS = f"{_OFFICE_RELS}/webSettings"
    ENDNOTES = f"{_OFFICE_RELS}/endnotes"
    FOOTNOTES = f"{_OFFICE_RELS}/footnotes"
    EXTENDED_PROPERTIES = f"{_OFFICE_RELS}/extended-properties"
    CUSTOM_PROPERTIES = f"{_OFFICE_RELS}/custom-properties"
    CUSTOM_XML = f"{_OFFICE_RELS}/customXml"
    CORE_PROPERTIES = "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
    COMMENTS_IDS = "http://schemas.microsoft.com/office/2016/09/relationships/commentsIds"
    COMMENTS_EXTENDED = "http://schemas.microsoft.com/office/2011/relationships/commentsExtended"
    PEOPLE = "http://schemas.microsoft.com/office/2011/relationships/people"


# TargetMode="External" 로 기록되는 관계
EXTERNAL_RELATIONSHIP_TYPES = frozenset({
    RelationshipType.HYPERLINK,
    RelationshipType.ATTACHED_TEMPLATE,
})

BINARY_RELATIONSHIP_TYPES = frozenset({
    RelationshipType.IMAGE,
})


class PartLocation(str, Enum):
    """관례적인 파트 경로"""
    CONTENT_TYPES = "[Content_Types].xml"
    ROOT_RELATIONSHIPS = "_rels/.rels"
    DOCUMENT = "word/document.xml"
    STYLES = "word/styles.xml"
    SETTINGS = "word/settings.xml"
    NUMBERING = "word/numbering.xml"
    COMMENTS = "word/comments.xml"
    CUSTOM_PROPERTIES = "docProps/custom.xml"
    MEDIA = "word/media"
