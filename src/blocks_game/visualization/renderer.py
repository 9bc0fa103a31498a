from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from blocks_game.game import GameState, Snapshot


BACKGROUND = (210, 240, 234)
TEXT = (80, 94, 121)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        1: (252, 159, 79),
        2: (192, 163, 245),
        3: (138, 150, 173),
        4: (168, 208, 254),
        5: (144, 191, 94),
        6: (255, 117, 134),
        7: (255, 212, 92),
    }
    return palette.get(int(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, cols: int, rows: int) -> Tuple[int, int]:
        width = self.margin * 3 + (cols + self.panel_cells) * self.cell_size
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _cells_surface(self, cells: np.ndarray) -> pygame.Surface:
        h, w = cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BACKGROUND)
        for y, x in np.argwhere(cells != 0):
            rect = pygame.Rect(
                int(x) * self.cell_size,
                int(y) * self.cell_size,
                self.cell_size - 1,
                self.cell_size - 1,
            )
            pygame.draw.rect(surf, _color_for_value(cells[y, x]), rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        rows, cols = snapshot.board.shape
        screen.fill((245, 250, 249))
        screen.blit(self._cells_surface(snapshot.overlay()), (self.margin, self.margin))

        panel_x = self.margin * 2 + cols * self.cell_size
        label = self._font.render("Next", True, TEXT)
        screen.blit(label, (panel_x, self.margin))
        if snapshot.next_piece is not None:
            screen.blit(self._cells_surface(snapshot.next_piece), (panel_x, self.margin + 24))

        info_lines = [
            f"Score: {snapshot.score}",
            f"Level: {int(snapshot.level)}",
        ]
        if snapshot.state is GameState.PAUSED:
            info_lines.append("Paused")
        y_text = self.margin + 24 + 5 * self.cell_size
        for i, txt in enumerate(info_lines):
            img = self._font.render(txt, True, TEXT)
            screen.blit(img, (panel_x, y_text + i * 22))

        if snapshot.state is GameState.GAME_OVER:
            board_w = cols * self.cell_size
            banner = pygame.Surface((board_w, 45), pygame.SRCALPHA)
            banner.fill((255, 255, 255, 204))
            top = self.margin + rows * self.cell_size // 2 - 30
            screen.blit(banner, (self.margin, top))
            over = self._font.render("Game Over!", True, TEXT)
            rect = over.get_rect(center=(self.margin + board_w // 2, top + 22))
            screen.blit(over, rect)

        pygame.display.flip()
