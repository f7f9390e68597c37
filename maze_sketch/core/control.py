import logging
from maze_sketch.algo.dfs import RecursiveBacktracker, CARVE

logger = logging.getLogger(__name__)


class PlaybackController:
    """
    Pause, single-step and watch-mode handling around a steppable generator.

    Everything here runs from the frame callback or from input events,
    which never overlap, so no locking is needed.
    """

    def __init__(self, generator: RecursiveBacktracker, step_delay: int = 1):
        if step_delay < 1:
            raise ValueError(f"step_delay must be >= 1, got {step_delay}")
        self.generator = generator
        self.step_delay = step_delay
        self.paused = True
        self.watch_mode = False
        self.frame_count = 0
        # Set when watch mode has paused at the current dead end
        self._has_watched = False

    @property
    def status(self) -> str:
        if self.generator.generated:
            return "Generated"
        return "Paused" if self.paused else "Running"

    def advance(self, ignore_pause: bool = False):
        if self.generator.generated or (self.paused and not ignore_pause):
            return None

        if self.generator.at_dead_end and self.watch_mode and not self._has_watched:
            # Stop before stepping back so the dead end stays on screen
            self.paused = True
            self._has_watched = True
            logger.debug(f"Watch mode paused at dead end {self.generator.head}")
            return None

        action = self.generator.step()
        if action == CARVE:
            self._has_watched = False
        if self.generator.generated:
            logger.info(f"Maze generated in {self.generator.step_count} steps")
        return action

    def on_frame(self):
        self.frame_count += 1
        if self.frame_count % self.step_delay == 0:
            return self.advance()
        return None

    def reset(self):
        self.generator.reset()
        self._has_watched = False
        self.paused = True
        logger.debug(f"Reset; new start cell {self.generator.head}")

    def toggle_pause(self):
        self.paused = not self.paused
        logger.debug(f"Paused: {self.paused}")

    def request_step(self):
        if not self.paused:
            return None
        return self.advance(ignore_pause=True)

    def toggle_watch(self):
        self.watch_mode = not self.watch_mode
        logger.debug(f"Watch mode: {self.watch_mode}")
