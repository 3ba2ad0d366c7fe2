"""WordprocessingML 모델

구조:
- base.py: 네임스페이스와 공통 유틸리티
- length.py: 길이 단위
- identifiers.py: ID 발급기, 번호 맵, 책갈피
- component.py: 컴포넌트 기반 클래스와 레지스트리
- tables.py: 표 격자 모델
- properties/: 속성 코덱
- components/: 컴포넌트 클래스
- package/: 패키지 파트
"""

from .identifiers import Bookmark, Bookmarks, IdAllocator, NumberMap
from .length import Length, cm, convert, emu, hpt, inch, pt, twip

__all__ = [
    "Bookmark", "Bookmarks", "IdAllocator", "NumberMap",
    "Length", "cm", "convert", "emu", "hpt", "inch", "pt", "twip",
]
