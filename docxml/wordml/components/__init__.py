"""문서 컴포넌트

모듈을 import 하면 각 클래스가 기본 레지스트리에 등록됩니다. 자식 클래스는
이름으로 찾기 때문에 모듈 순서는 상관없습니다.
"""

from .bookmark import BookmarkRangeEnd, BookmarkRangeStart
from .cell import Cell
from .changes import TextAddition, TextDeletion
from .comment import Comment, CommentProperties, CommentRangeEnd, CommentRangeStart
from .field import (
    Field,
    FieldCharProperties,
    FieldProperties,
    FieldRangeEnd,
    FieldRangeInstruction,
    FieldRangeSeparator,
    FieldRangeStart,
)
from .hyperlink import Hyperlink, HyperlinkProperties
from .image import Image, ImageProperties
from .paragraph import Paragraph
from .row import Row, RowAddition, RowDeletion, TrackedRowProperties
from .section import Section
from .table import Table
from .text import Break, BreakProperties, NonBreakingHyphen, Symbol, SymbolProperties, Tab, Text
from .watermark import WatermarkText, WatermarkTextProperties

__all__ = [
    # Block
    "Section", "Paragraph", "Table", "Row", "RowAddition", "RowDeletion", "TrackedRowProperties", "Cell",
    # Inline
    "Text", "Break", "BreakProperties", "Tab", "NonBreakingHyphen", "Symbol", "SymbolProperties",
    "TextAddition", "TextDeletion",
    "Image", "ImageProperties",
    "Hyperlink", "HyperlinkProperties",
    "Field", "FieldProperties", "FieldCharProperties",
    "FieldRangeStart", "FieldRangeSeparator", "FieldRangeEnd", "FieldRangeInstruction",
    # Markers
    "Comment", "CommentProperties", "CommentRangeStart", "CommentRangeEnd",
    "BookmarkRangeStart", "BookmarkRangeEnd",
    # Header
    "WatermarkText", "WatermarkTextProperties",
]
