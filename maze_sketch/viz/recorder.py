import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)


class VideoRecorder:
    """
    Writes rendered frames of the sketch to an mp4 file.

    Nothing touches the filesystem until the first frame arrives: the
    output directory and the OpenCV writer are both created then, sized
    to that first surface.
    """

    RECORDINGS_DIR = "recordings"
    FOURCC = 'mp4v'

    def __init__(self, active=False, output_file=None, fps=30, label="maze"):
        self.active = active
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not output_file:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_file = os.path.join(self.RECORDINGS_DIR, f"{label}_{ts}.mp4")
        self.output_file = output_file

    @staticmethod
    def surface_to_bgr(surface: pygame.Surface) -> np.ndarray:
        # surfarray is column-major RGB (w, h, 3); OpenCV wants row-major BGR (h, w, 3)
        rgb = np.ascontiguousarray(pygame.surfarray.array3d(surface).swapaxes(0, 1))
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    def _open(self, frame_size):
        folder = os.path.dirname(self.output_file)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self.frame_size = frame_size
        self.writer = cv2.VideoWriter(
            self.output_file, cv2.VideoWriter_fourcc(*self.FOURCC), self.fps, frame_size
        )
        logger.info(f"Recording {frame_size[0]}x{frame_size[1]} @ {self.fps} fps to {self.output_file}")

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return
        if self.writer is None:
            self._open(surface.get_size())
        self.writer.write(self.surface_to_bgr(surface))
        self.frame_count += 1

    def stop(self) -> int:
        """Finalizes the file. Returns how many frames were written."""
        if self.writer is not None:
            self.writer.release()
            self.writer = None
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
        return self.frame_count
