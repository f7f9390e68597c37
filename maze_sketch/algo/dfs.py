import random
from typing import List, Optional, Set, Tuple
from maze_sketch.core.grid import Grid
from maze_sketch.algo.base import Generator

# Step results
CARVE = "carve"
BACKTRACK = "backtrack"

Coord = Tuple[int, int]


class RecursiveBacktracker(Generator):
    """
    Randomized depth-first maze carver that runs one step at a time.

    The path stack is both the DFS stack and the trail drawn on screen.
    Every step either carves into an unvisited neighbor of the head or
    pops the head, so a WxH grid is finished after at most 2*W*H steps.
    """

    def __init__(self, width: int, height: int, seed: int = None, start: Coord = None):
        super().__init__(width, height, seed)
        self.rng = random.Random(seed)
        self.visited: Set[Coord] = set()
        self.path: List[Coord] = []
        self._generated = False
        self.reset(start)

    def reset(self, start: Coord = None):
        self.grid = Grid(self.width, self.height)
        self.visited = set()
        self.path = []
        self._generated = False
        self.step_count = 0

        if start is None:
            start = (self.rng.randrange(self.width), self.rng.randrange(self.height))
        elif not self.grid.in_bounds(*start):
            raise IndexError(f"Start cell {start} out of bounds")

        start = tuple(start)
        self.path.append(start)
        self.visited.add(start)

    @property
    def generated(self) -> bool:
        return self._generated

    @property
    def head(self) -> Optional[Coord]:
        return self.path[-1] if self.path else None

    def candidates(self) -> List[Tuple[int, int, int]]:
        """Unvisited in-bounds neighbors of the head as (nx, ny, direction)."""
        if self._generated:
            return []
        x, y = self.path[-1]
        return [
            (nx, ny, dir_bit)
            for nx, ny, dir_bit in self.grid.get_neighbors(x, y)
            if (nx, ny) not in self.visited
        ]

    @property
    def at_dead_end(self) -> bool:
        return not self._generated and not self.candidates()

    def step(self) -> Optional[str]:
        if self._generated:
            return None

        cx, cy = self.path[-1]
        neighbors = self.candidates()

        if not neighbors:
            # Backtrack
            self.path.pop()
            self.step_count += 1
            if not self.path:
                self._generated = True
            return BACKTRACK

        nx, ny, _ = self.rng.choice(neighbors)
        self.visited.add((nx, ny))
        self.path.append((nx, ny))

        dir_bit = Grid.direction_between(cx, cy, nx, ny)
        self.grid.carve_path(cx, cy, dir_bit)
        self.step_count += 1
        return CARVE
