import logging
from typing import Callable, List, Tuple
import pygame
from maze_sketch.core.control import PlaybackController
from maze_sketch.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class Button:
    """A clickable labelled rectangle. The label is recomputed every frame."""

    COLOR_FACE = (240, 240, 240)
    COLOR_BORDER = (40, 40, 40)
    COLOR_TEXT = (0, 0, 0)

    def __init__(self, rect: pygame.Rect, label: Callable[[], str], action: Callable[[], None]):
        self.rect = rect
        self.label = label
        self.action = action

    def handle_click(self, pos) -> bool:
        if self.rect.collidepoint(pos):
            self.action()
            return True
        return False

    def draw(self, surface, font):
        pygame.draw.rect(surface, self.COLOR_FACE, self.rect)
        pygame.draw.rect(surface, self.COLOR_BORDER, self.rect, 2)
        text = font.render(self.label(), True, self.COLOR_TEXT)
        surface.blit(text, text.get_rect(center=self.rect.center))


class Renderer:
    COLOR_BG = (128, 128, 128)        # #808080
    COLOR_HEAD = (82, 247, 93)        # #52f75d
    COLOR_PATH = (237, 69, 69)        # #ed4545
    COLOR_VISITED = (255, 255, 255)   # #ffffff
    COLOR_UNVISITED = (160, 160, 160) # #a0a0a0
    COLOR_WALL = (0, 0, 0)
    COLOR_HUD = (255, 255, 255)

    WALL_WIDTH = 4
    # Margin around the canvas so outer walls are as thick as inner ones
    BORDER = 2

    BUTTON_HEIGHT = 50
    BUTTON_GAP = 8

    def __init__(self, controller: PlaybackController, canvas_width=600, canvas_height=600,
                 fps=60, record=False):
        self.controller = controller
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.fps = fps

        grid = controller.generator.grid
        self.cell_width = canvas_width / grid.width
        self.cell_height = canvas_height / grid.height

        self.screen_width = canvas_width + self.BORDER * 2
        canvas_bottom = canvas_height + self.BORDER * 2
        self.hud_y = canvas_bottom + self.BUTTON_HEIGHT + self.BUTTON_GAP * 2
        self.screen_height = self.hud_y + 24

        self.buttons = self.build_buttons(canvas_bottom + self.BUTTON_GAP)
        # Frames are captured once per tick, so the video plays back at the loop rate
        self.recorder = VideoRecorder(active=record, fps=fps, label=f"maze_{grid.width}x{grid.height}")

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    @property
    def generator(self):
        return self.controller.generator

    def build_buttons(self, top: int) -> List[Button]:
        ctl = self.controller
        layout = [
            (100, lambda: "Reset", ctl.reset),
            (100, lambda: "Unpause" if ctl.paused else "Pause", ctl.toggle_pause),
            (100, lambda: "Step", ctl.request_step),
            (225, lambda: "Watch Mode Enabled" if ctl.watch_mode else "Watch Mode Disabled",
             ctl.toggle_watch),
        ]
        buttons = []
        left = self.BUTTON_GAP
        for width, label, action in layout:
            rect = pygame.Rect(left, top, width, self.BUTTON_HEIGHT)
            buttons.append(Button(rect, label, action))
            left += width + self.BUTTON_GAP
        return buttons

    def init_window(self):
        pygame.init()
        grid = self.generator.grid
        pygame.display.set_caption(f"Recursive Backtracking - {grid.width}x{grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 18)

    def cell_color(self, x: int, y: int) -> Color:
        gen = self.generator
        if (x, y) == gen.head:
            return self.COLOR_HEAD
        if (x, y) in gen.path:
            return self.COLOR_PATH
        if (x, y) in gen.visited:
            return self.COLOR_VISITED
        return self.COLOR_UNVISITED

    def cell_rect(self, x: int, y: int) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) of a cell in screen pixels."""
        left = x * self.cell_width + self.BORDER
        top = y * self.cell_height + self.BORDER
        return left, top, left + self.cell_width, top + self.cell_height

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                logger.debug(f"pressed {pygame.key.name(event.key)}")
                self.handle_key(event.key)

            elif event.type == pygame.KEYUP:
                logger.debug(f"released {pygame.key.name(event.key)}")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for button in self.buttons:
                    if button.handle_click(event.pos):
                        break

    def handle_key(self, key: int):
        ctl = self.controller
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_r:
            ctl.reset()
        elif key == pygame.K_SPACE:
            ctl.toggle_pause()
        elif key in (pygame.K_s, pygame.K_RIGHT):
            ctl.request_step()
        elif key == pygame.K_w:
            ctl.toggle_watch()

    def draw_maze(self):
        grid = self.generator.grid

        # 1. Cell backgrounds
        for y in range(grid.height):
            for x in range(grid.width):
                left, top, right, bottom = self.cell_rect(x, y)
                rect = pygame.Rect(int(left), int(top), int(right) - int(left), int(bottom) - int(top))
                pygame.draw.rect(self.surface, self.cell_color(x, y), rect)

        # 2. Walls on every side that has no passage
        for y in range(grid.height):
            for x in range(grid.width):
                cell = grid.cell(x, y)
                left, top, right, bottom = self.cell_rect(x, y)
                if not cell.up:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (right, top), self.WALL_WIDTH)
                if not cell.down:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (left, bottom), (right, bottom), self.WALL_WIDTH)
                if not cell.left:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (left, bottom), self.WALL_WIDTH)
                if not cell.right:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (right, top), (right, bottom), self.WALL_WIDTH)

    def hud_text(self) -> str:
        gen = self.generator
        total = gen.grid.width * gen.grid.height
        watch = " | WATCH" if self.controller.watch_mode else ""
        rec = " | REC" if self.recorder.active else ""
        return (f"{self.controller.status} | Visited: {len(gen.visited)}/{total} | "
                f"Path: {len(gen.path)} | Steps: {gen.step_count}{watch}{rec}")

    def draw_hud(self):
        for button in self.buttons:
            button.draw(self.surface, self.font)
        lbl = self.font.render(self.hud_text(), True, self.COLOR_HUD)
        self.surface.blit(lbl, (self.BUTTON_GAP, self.hud_y))

    def run_loop(self):
        try:
            while self.running:
                self.handle_input()
                self.controller.on_frame()

                self.surface.fill(self.COLOR_BG)
                self.draw_maze()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder.active:
                    self.recorder.capture_frame(self.surface)

                self.clock.tick(self.fps)
        finally:
            self.recorder.stop()
            pygame.quit()
