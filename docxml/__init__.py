"""
docxml - OOXML WordprocessingML(.docx) 문서를 만들고 읽는 라이브러리
"""

from docxml.core import Docx
from docxml.exceptions import (
    ArchiveError,
    DocxmlError,
    DuplicateIdentifierError,
    MissingAncestorError,
    MissingReferenceError,
    StructureError,
    TableStructureError,
    UnhandledRelationshipError,
    UnknownComponentError,
)
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.length import Length, cm, emu, hpt, inch, pt, twip

__version__ = "0.1.0"
__all__ = [
    "Docx",
    "IdAllocator",
    "Length", "cm", "emu", "hpt", "inch", "pt", "twip",
    "DocxmlError", "ArchiveError", "StructureError", "MissingAncestorError",
    "TableStructureError", "UnknownComponentError", "UnhandledRelationshipError",
    "MissingReferenceError", "DuplicateIdentifierError",
]
