"""DOCX ZIP 컨테이너 읽기/쓰기"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from docxml.exceptions import ArchiveError
from docxml.wordml.base import serialize


logger = logging.getLogger(__name__)


def normalize_location(location: str) -> str:
    """패키지 경로 정규화 ('/word/x.xml', './word/x.xml' -> 'word/x.xml')"""
    while location.startswith("./"):
        location = location[2:]
    return location.lstrip("/")


class Archive:
    """메모리 상의 ZIP 파일 목록"""

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self._files: Dict[str, bytes] = {}
        for location, data in (files or {}).items():
            self._files[normalize_location(location)] = data

    @classmethod
    def from_bytes(cls, data: bytes) -> "Archive":
        try:
            with zipfile.ZipFile(io.BytesIO(data), "r") as zf:
                files = {
                    info.filename: zf.read(info.filename)
                    for info in zf.infolist()
                    if not info.is_dir()
                }
        except zipfile.BadZipFile as e:
            raise ArchiveError("Not a valid ZIP archive", str(e)) from e
        logger.debug("Read %d files from archive", len(files))
        return cls(files)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Archive":
        return cls.from_bytes(Path(path).read_bytes())

    # ============================================================
    # 읽기
    # ============================================================

    def files(self) -> List[str]:
        return list(self._files)

    def has_file(self, location: str) -> bool:
        return normalize_location(location) in self._files

    def read_binary(self, location: str) -> bytes:
        location = normalize_location(location)
        try:
            return self._files[location]
        except KeyError:
            raise ArchiveError(
                f'Could not read "{location}" from archive',
                "archive contains " + ", ".join(sorted(self._files)),
            ) from None

    def read_text(self, location: str) -> str:
        return self.read_binary(location).decode("utf-8")

    def read_xml(self, location: str) -> etree._Element:
        data = self.read_binary(location)
        try:
            return etree.fromstring(data)
        except etree.XMLSyntaxError as e:
            raise ArchiveError(f'Could not parse "{normalize_location(location)}"', str(e)) from e

    # ============================================================
    # 쓰기
    # ============================================================

    def add_binary_file(self, location: str, data: bytes) -> "Archive":
        location = normalize_location(location)
        logger.debug("Adding %s (%d bytes)", location, len(data))
        self._files[location] = data
        return self

    def add_text_file(self, location: str, text: str) -> "Archive":
        return self.add_binary_file(location, text.encode("utf-8"))

    def add_xml_file(self, location: str, root: etree._Element) -> "Archive":
        return self.add_binary_file(location, serialize(root))

    def to_bytes(self) -> bytes:
        mem = io.BytesIO()
        with zipfile.ZipFile(mem, "w", compression=zipfile.ZIP_DEFLATED) as out:
            for location, data in self._files.items():
                out.writestr(location, data)
        return mem.getvalue()

    def to_file(self, path: Union[str, Path]) -> None:
        Path(path).write_bytes(self.to_bytes())
