"""표 격자 모델

행/셀 컴포넌트와 각 셀의 col_span, row_span 으로 좌표 격자를 계산한다.
셀은 위에서 아래, 왼쪽에서 오른쪽 순서로 그 행에서 아직 점유되지 않은
첫 열에 놓이고, 병합 범위 전체를 점유한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from docxml.exceptions import TableStructureError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellInfo:
    """셀의 원점 좌표와 병합 범위 (0부터 시작)"""
    column: int
    row: int
    colspan: int
    rowspan: int


def grid_signature(rows: Sequence[Any]) -> Hashable:
    """격자 모양을 결정하는 값 (행/셀 식별자와 병합 범위)"""
    return tuple(
        (id(row), tuple((id(cell), cell.props.col_span, cell.props.row_span) for cell in row.children))
        for row in rows
    )


class TableGridModel:
    """행/셀 -> (열, 행) 좌표 격자"""

    def __init__(self, rows: Sequence[Any]):
        self._rows = list(rows)
        self._occupancy: Dict[Tuple[int, int], Any] = {}
        self._info: Dict[int, CellInfo] = {}
        self._build()

    def _build(self) -> None:
        for y, row in enumerate(self._rows):
            x = 0
            for cell in row.children:
                while (x, y) in self._occupancy:
                    x += 1
                colspan = max(1, cell.props.col_span or 1)
                rowspan = max(1, cell.props.row_span or 1)
                for dy in range(rowspan):
                    for dx in range(colspan):
                        position = (x + dx, y + dy)
                        if position in self._occupancy:
                            raise TableStructureError(f"Cell {position[0]},{position[1]} already occupied")
                        self._occupancy[position] = cell
                self._info[id(cell)] = CellInfo(x, y, colspan, rowspan)
                x += colspan
        logger.debug("Built table grid: %d rows, %d columns", self.row_count, self.column_count)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        if not self._occupancy:
            return 0
        return max(x for x, _ in self._occupancy) + 1

    def _columns_in_row(self, y: int) -> List[int]:
        return sorted(x for x, row in self._occupancy if row == y)

    def get_cells_in_row(self, y: int) -> List[Any]:
        """y 행이 점유한 각 열의 셀 (열 순서, 병합 셀은 반복)"""
        return [self._occupancy[(x, y)] for x in self._columns_in_row(y)]

    def get_node_at_cell(self, x: int, y: int) -> Optional[Any]:
        return self._occupancy.get((x, y))

    def get_cell_info(self, cell: Any) -> CellInfo:
        info = self._info.get(id(cell))
        if info is None:
            raise TableStructureError("Cell is not part of this table")
        return info

    def is_origin(self, x: int, y: int) -> bool:
        """(x, y) 가 셀의 원점인지 (False 면 병합되어 사라지는 자리)"""
        cell = self.get_node_at_cell(x, y)
        if cell is None:
            return False
        info = self.get_cell_info(cell)
        return info.column == x and info.row == y

    def is_rectangular(self) -> bool:
        """모든 행이 첫 행과 같은 열 수를 점유하는지 확인 (아니면 예외)"""
        if not self._rows:
            return True
        expected = len(self._columns_in_row(0))
        for y in range(1, self.row_count):
            actual = len(self._columns_in_row(y))
            if actual != expected:
                raise TableStructureError(f"Row {y} has {actual} columns, expected {expected}")
        return True
