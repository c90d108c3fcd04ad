"""
六边形网格

使用轴向坐标(q, r)，范围为矩形 0 <= q < width, 0 <= r < height.
距离和直线通过立方坐标计算：x = q, z = r, y = -x - z.
"""

import math
from typing import List, Optional, Tuple

from .grid import Grid
from .types import HexDirection, Position

HEX_OFFSETS: List[Tuple[HexDirection, int, int]] = [
    (HexDirection.EAST, 1, 0),
    (HexDirection.WEST, -1, 0),
    (HexDirection.NORTHEAST, 1, -1),
    (HexDirection.NORTHWEST, 0, -1),
    (HexDirection.SOUTHEAST, 0, 1),
    (HexDirection.SOUTHWEST, -1, 1),
]

Cube = Tuple[float, float, float]


def axial_to_cube(position: Position) -> Tuple[int, int, int]:
    x = position.q
    z = position.r
    return x, -x - z, z


def cube_to_axial(x: int, z: int) -> Position:
    return Position(x, z)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def cube_round(cube: Cube) -> Tuple[int, int, int]:
    """
    把浮点立方坐标取整到最近的合法立方坐标

    误差最大的分量由另外两个分量重新计算，以保持 x + y + z == 0.
    """
    x, y, z = cube
    rx, ry, rz = _round_half_up(x), _round_half_up(y), _round_half_up(z)

    x_diff = abs(rx - x)
    y_diff = abs(ry - y)
    z_diff = abs(rz - z)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry

    return rx, ry, rz


class HexGrid(Grid):
    """六边形网格，每个内部格子有6个邻居"""

    def get_neighbors(self, position: Position) -> List[Position]:
        neighbors = []
        for _, dq, dr in HEX_OFFSETS:
            neighbor = Position(position.q + dq, position.r + dr)
            if self.is_valid_position(neighbor):
                neighbors.append(neighbor)
        return neighbors

    def get_distance(self, start: Position, end: Position) -> int:
        """立方距离 (|dx| + |dy| + |dz|) / 2"""
        x1, y1, z1 = axial_to_cube(start)
        x2, y2, z2 = axial_to_cube(end)
        return (abs(x1 - x2) + abs(y1 - y2) + abs(z1 - z2)) // 2

    def get_direction(self, start: Position, end: Position) -> Optional[HexDirection]:
        delta = (end.q - start.q, end.r - start.r)
        for direction, dq, dr in HEX_OFFSETS:
            if delta == (dq, dr):
                return direction
        return None

    def get_position_in_direction(self, start: Position,
                                  direction: HexDirection) -> Optional[Position]:
        for candidate, dq, dr in HEX_OFFSETS:
            if candidate == direction:
                position = Position(start.q + dq, start.r + dr)
                return position if self.is_valid_position(position) else None
        return None

    def get_line(self, start: Position, end: Position) -> List[Position]:
        """
        两点之间的直线

        在立方坐标中线性插值distance+1个采样点，每个点取整到最近的格子.
        结果包含两个端点，可能包含范围外的坐标.
        """
        distance = self.get_distance(start, end)
        if distance == 0:
            return [start]

        x1, y1, z1 = axial_to_cube(start)
        x2, y2, z2 = axial_to_cube(end)

        line = []
        for i in range(distance + 1):
            t = i / distance
            sample = (
                x1 + (x2 - x1) * t,
                y1 + (y2 - y1) * t,
                z1 + (z2 - z1) * t,
            )
            rx, _, rz = cube_round(sample)
            line.append(cube_to_axial(rx, rz))
        return line

    def get_range(self, center: Position, radius: int) -> List[Position]:
        """以center为中心、立方距离不超过radius的所有范围内坐标(包括center)"""
        cx, cy, cz = axial_to_cube(center)
        positions = []
        for dx in range(-radius, radius + 1):
            for dy in range(max(-radius, -dx - radius), min(radius, -dx + radius) + 1):
                dz = -dx - dy
                position = cube_to_axial(cx + dx, cz + dz)
                if self.is_valid_position(position):
                    positions.append(position)
        return positions
