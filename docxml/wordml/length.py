"""길이 단위 변환

OOXML은 속성마다 다른 단위를 사용한다 (twip, half-point, EMU). 내부적으로는
포인트 값 하나를 저장하고 필요한 단위로 환산한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict


EMU_PER_PT = 12700
TWIP_PER_PT = 20
HPT_PER_PT = 2
PT_PER_INCH = 72
CM_PER_INCH = 2.54


@dataclass(frozen=True)
class Length:
    """포인트 기준 길이 값"""
    pt: float

    @property
    def twip(self) -> float:
        return self.pt * TWIP_PER_PT

    @property
    def hpt(self) -> float:
        return self.pt * HPT_PER_PT

    @property
    def emu(self) -> float:
        return self.pt * EMU_PER_PT

    @property
    def inch(self) -> float:
        return self.pt / PT_PER_INCH

    @property
    def cm(self) -> float:
        return self.pt * CM_PER_INCH / PT_PER_INCH


def pt(amount: float) -> Length:
    """포인트"""
    return Length(amount)


def twip(amount: float) -> Length:
    """1/20 포인트"""
    return Length(amount / TWIP_PER_PT)


def hpt(amount: float) -> Length:
    """1/2 포인트"""
    return Length(amount / HPT_PER_PT)


def emu(amount: float) -> Length:
    """English Metric Unit"""
    return Length(amount / EMU_PER_PT)


def inch(amount: float) -> Length:
    """인치"""
    return Length(amount * PT_PER_INCH)


def cm(amount: float) -> Length:
    """센티미터"""
    return Length(amount * PT_PER_INCH / CM_PER_INCH)


_INGESTORS: Dict[str, Callable[[float], Length]] = {
    "pt": pt,
    "twip": twip,
    "hpt": hpt,
    "emu": emu,
    "inch": inch,
    "cm": cm,
}


def convert(value: float, unit: str) -> Length:
    """단위 이름으로 Length 생성"""
    ingestor = _INGESTORS.get(unit)
    if ingestor is None:
        raise ValueError(f'Unknown unit "{unit}"')
    return ingestor(value)
