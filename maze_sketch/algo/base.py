from abc import ABC, abstractmethod
from typing import Iterator, Optional
from maze_sketch.core.grid import Grid

class Generator(ABC):
    def __init__(self, width: int, height: int, seed: int = None):
        self.width = width
        self.height = height
        self.seed = seed
        self.grid: Optional[Grid] = None
        self.step_count = 0

    @abstractmethod
    def reset(self):
        """Throws away the current maze and starts over on an empty grid."""
        pass

    @abstractmethod
    def step(self) -> Optional[str]:
        """
        Advances generation by a single step, mutating self.grid in-place.
        Returns a short code for what happened, or None if nothing did.
        """
        pass

    @property
    @abstractmethod
    def generated(self) -> bool:
        pass

    def run(self) -> Iterator[str]:
        """
        Yields a status string after every step until the maze is done.
        """
        while not self.generated:
            action = self.step()
            yield f"{action}: step {self.step_count}"
        yield "Done"

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
