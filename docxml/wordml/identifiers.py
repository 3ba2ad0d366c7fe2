"""문서별 식별자 관리

관계 ID, 미디어 파일 이름, 그림 ID, 번호 키는 모두 문서 인스턴스가 가진
할당기에서 발급한다. 테스트에서는 seed를 고정한 할당기를 주입한다.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Container, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from docxml.exceptions import DuplicateIdentifierError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class IdAllocator:
    """랜덤 문자열 ID와 순번 숫자 ID 발급"""

    def __init__(self, seed: Optional[int] = None, first_numeric_id: int = 1):
        self._random = random.Random(seed)
        self._numeric_id = first_numeric_id

    def random_id(self, prefix: str) -> str:
        return f"{prefix}{self._random.getrandbits(32):08x}"

    def unique_id(self, prefix: str, taken: Container[str]) -> str:
        """taken에 없는 랜덤 ID"""
        candidate = self.random_id(prefix)
        while candidate in taken:
            logger.debug("Identifier %s already taken, drawing another", candidate)
            candidate = self.random_id(prefix)
        return candidate

    def next_numeric_id(self) -> int:
        nid = self._numeric_id
        self._numeric_id += 1
        return nid


class NumberMap(Generic[T]):
    """가장 작은 빈 정수 키를 발급하는 맵"""

    def __init__(self, offset: int = 0):
        self.offset = offset
        self._items: Dict[int, T] = {}

    def get_next_available_key(self) -> int:
        key = self.offset
        while key in self._items:
            key += 1
        return key

    def add(self, value: T) -> int:
        key = self.get_next_available_key()
        self._items[key] = value
        return key

    def set(self, key: int, value: T) -> None:
        self._items[key] = value

    def get(self, key: int) -> Optional[T]:
        return self._items.get(key)

    def has(self, key: int) -> bool:
        return key in self._items

    def array(self) -> List[T]:
        """키 순서의 값 목록"""
        return [self._items[key] for key in sorted(self._items)]

    def items(self) -> List[Tuple[int, T]]:
        return [(key, self._items[key]) for key in sorted(self._items)]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.array())


@dataclass(frozen=True)
class Bookmark:
    """책갈피 식별자와 이름"""
    id: int
    name: str


class Bookmarks:
    """문서 단위 책갈피 ID 등록부"""

    def __init__(self):
        self._bookmarks: Dict[int, Optional[str]] = {}

    def register_identifier(self, id: int, name: Optional[str] = None) -> None:
        if id in self._bookmarks:
            raise DuplicateIdentifierError(f'Bookmark with identifier "{id}" already exists')
        self._bookmarks[id] = name

    def create(self) -> Bookmark:
        bid = 0
        while bid in self._bookmarks:
            bid += 1
        bookmark = Bookmark(bid, f"__docxml_bookmark_{bid}")
        self.register_identifier(bookmark.id, bookmark.name)
        return bookmark

    def __contains__(self, id: object) -> bool:
        return id in self._bookmarks
