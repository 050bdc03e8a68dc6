import numpy as np
import pygame

from gridtrace import config
from gridtrace.core.events import EventSink
from gridtrace.core.grid import Grid


class RenderState(EventSink):
    """Event sink that keeps what the viewer needs to paint."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.walls = frozenset(grid.walls)
        self.visited = set()
        self.path = []
        self.working = frozenset()

    def on_visit(self, pos):
        self.visited.add(pos)

    def on_path_step(self, pos):
        self.path.append(pos)

    def on_walls_changed(self, walls):
        self.walls = walls

    def on_working_cells_changed(self, cells):
        self.working = cells


COLOR_BG = (10, 10, 10)
COLOR_WALL = (200, 200, 200)
COLOR_VISITED = (60, 100, 160)  # Blue tint
COLOR_WORKING = (120, 200, 120)
COLOR_SOLUTION = (255, 215, 0)  # Gold
COLOR_START = (40, 200, 80)
COLOR_TARGET = (220, 50, 50)


def grid_image(state: RenderState) -> np.ndarray:
    """RGB image of shape (size, size, 3), one pixel per cell, row-major."""
    size = state.grid.size
    img = np.empty((size, size, 3), dtype=np.uint8)
    img[:] = COLOR_BG

    layers = (
        (state.visited, COLOR_VISITED),
        (state.walls, COLOR_WALL),
        (state.working, COLOR_WORKING),
        (state.path, COLOR_SOLUTION),
        ((state.grid.start,), COLOR_START),
        ((state.grid.target,), COLOR_TARGET),
    )
    for cells, color in layers:
        cells = [c for c in cells if 0 <= c[0] < size and 0 <= c[1] < size]
        if cells:
            rows, cols = zip(*cells)
            img[list(rows), list(cols)] = color
    return img


class Renderer:
    def __init__(self, grid: Grid, run=None, state: RenderState = None,
                 width=config.WINDOW_WIDTH, height=config.WINDOW_HEIGHT):
        self.grid = grid
        self.run = run
        self.state = state or RenderState(grid)
        self.screen_width = width
        self.screen_height = height

        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.finished = run is None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)
        self.cell_size = max(1.0, min(available_w, available_h) / self.grid.size)

        total = self.grid.size * self.cell_size
        self.offset_x = (self.screen_width - total) / 2
        self.offset_y = (self.screen_height - total) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"gridtrace - {self.grid.size}x{self.grid.size}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                if self.run is not None and not self.finished:
                    self.run.cancel()
                else:
                    self.running = False

    def draw_grid(self):
        self.surface.fill(COLOR_BG)
        # surfarray is indexed (x, y), the image is (row, col)
        cells = pygame.surfarray.make_surface(np.transpose(grid_image(self.state), (1, 0, 2)))
        side = int(self.grid.size * self.cell_size)
        self.surface.blit(pygame.transform.scale(cells, (side, side)), (int(self.offset_x), int(self.offset_y)))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        status = "Done" if self.finished else "Running"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.size}x{self.grid.size}",
            f"Visited: {len(self.state.visited)}  Path: {len(self.state.path)}",
            f"Status: {status}",
        ]
        if self.finished and self.run is not None and self.run.result is not None:
            info.append(f"Result: {self.run.result.status.value}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self, steps_per_frame=config.STEPS_PER_FRAME):
        while self.running:
            self.handle_input()

            if not self.finished:
                for _ in range(steps_per_frame):
                    if not self.run.step():
                        self.finished = True
                        break

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(config.FPS)

        if self.run is not None and not self.finished:
            self.run.close()
        pygame.quit()
