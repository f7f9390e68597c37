import unittest
import sys
import os
import shutil

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pygame
from maze_sketch.viz.recorder import VideoRecorder

class TestVideoRecorder(unittest.TestCase):
    def setUp(self):
        self.old_dir = VideoRecorder.RECORDINGS_DIR
        VideoRecorder.RECORDINGS_DIR = "test_out"

    def tearDown(self):
        VideoRecorder.RECORDINGS_DIR = self.old_dir
        shutil.rmtree("test_out", ignore_errors=True)

    def test_inactive_is_noop(self):
        rec = VideoRecorder()
        self.assertIsNone(rec.output_file)
        rec.capture_frame(pygame.Surface((8, 8)))
        self.assertEqual(rec.frame_count, 0)
        self.assertIsNone(rec.writer)
        self.assertEqual(rec.stop(), 0)
        self.assertFalse(os.path.exists("test_out"))

    def test_default_filename(self):
        rec = VideoRecorder(active=True, label="maze_5x5")
        self.assertEqual(os.path.dirname(rec.output_file), "test_out")
        name = os.path.basename(rec.output_file)
        self.assertTrue(name.startswith("maze_5x5_"))
        self.assertTrue(name.endswith(".mp4"))
        # Directory only appears once a frame is captured
        self.assertFalse(os.path.exists("test_out"))

    def test_explicit_filename(self):
        rec = VideoRecorder(active=True, output_file="custom.mp4")
        self.assertEqual(rec.output_file, "custom.mp4")

    def test_surface_to_bgr(self):
        surface = pygame.Surface((4, 2))
        surface.fill((255, 0, 0))
        frame = VideoRecorder.surface_to_bgr(surface)
        self.assertEqual(frame.shape, (2, 4, 3))
        self.assertEqual(tuple(frame[1, 3]), (0, 0, 255))

    def test_records_frames(self):
        path = os.path.join("test_out", "x.mp4")
        rec = VideoRecorder(active=True, output_file=path, fps=10)
        surface = pygame.Surface((64, 48))

        for shade in (0, 80, 160, 240):
            surface.fill((shade, shade, shade))
            rec.capture_frame(surface)

        self.assertEqual(rec.frame_count, 4)
        self.assertEqual(rec.frame_size, (64, 48))
        self.assertIsNotNone(rec.writer)

        self.assertEqual(rec.stop(), 4)
        self.assertIsNone(rec.writer)
        self.assertTrue(os.path.exists(path))

if __name__ == '__main__':
    unittest.main()
