from array import array
from collections import namedtuple
from typing import Iterator, List, Tuple

Cell = namedtuple("Cell", ["x", "y", "up", "down", "left", "right"])


class Grid:
    # Connectivity bits: a set bit is a carved passage
    UP    = 0b0001
    RIGHT = 0b0010
    DOWN  = 0b0100
    LEFT  = 0b1000

    NO_PASSAGES = 0

    # Direction Helpers
    DX = {UP: 0, DOWN: 0, RIGHT: 1, LEFT: -1}
    DY = {UP: -1, DOWN: 1, RIGHT: 0, LEFT: 0}
    OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell, all cells disconnected
        self.cells = array('B', [self.NO_PASSAGES] * (width * height))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    @classmethod
    def direction_between(cls, ax: int, ay: int, bx: int, by: int) -> int:
        """
        Direction to travel from cell A to the adjacent cell B.
        Vertical offsets are checked first, then horizontal.
        """
        if abs(ax - bx) + abs(ay - by) != 1:
            raise ValueError(f"Cells ({ax}, {ay}) and ({bx}, {by}) are not adjacent")
        if by < ay:
            return cls.UP
        if by > ay:
            return cls.DOWN
        if bx < ax:
            return cls.LEFT
        return cls.RIGHT

    def carve_path(self, x: int, y: int, dir_bit: int):
        """
        Connects cell (x,y) with its neighbor in 'dir_bit'.
        The neighbor gets the OPPOSITE bit so both sides agree.
        """
        idx1 = self.get_index(x, y)
        x2 = x + self.DX[dir_bit]
        y2 = y + self.DY[dir_bit]

        if not self.in_bounds(x2, y2):
            return # Cannot carve into void

        idx2 = y2 * self.width + x2
        self.cells[idx1] |= dir_bit
        self.cells[idx2] |= self.OPPOSITE[dir_bit]

    def is_connected(self, x: int, y: int, dir_bit: int) -> bool:
        return (self.cells[self.get_index(x, y)] & dir_bit) != 0

    def cell(self, x: int, y: int) -> Cell:
        val = self.cells[self.get_index(x, y)]
        return Cell(
            x, y,
            up=bool(val & self.UP),
            down=bool(val & self.DOWN),
            left=bool(val & self.LEFT),
            right=bool(val & self.RIGHT),
        )

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check passages or visited state.
        """
        # Left
        if x > 0:
            yield (x - 1, y, self.LEFT)
        # Right
        if x < self.width - 1:
            yield (x + 1, y, self.RIGHT)
        # Up
        if y > 0:
            yield (x, y - 1, self.UP)
        # Down
        if y < self.height - 1:
            yield (x, y + 1, self.DOWN)

    def connections(self) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
        """Every carved passage exactly once, as ((x, y), (nx, ny))."""
        result = []
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                # Only look right and down so each passage is reported once
                if val & self.RIGHT:
                    result.append(((x, y), (x + 1, y)))
                if val & self.DOWN:
                    result.append(((x, y), (x, y + 1)))
        return result

    def connection_count(self) -> int:
        return len(self.connections())
