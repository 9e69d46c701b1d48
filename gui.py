# gui.py

from __future__ import annotations

import calendar
from typing import Dict, Tuple

import pygame

from board import (
    BLOCKED,
    BOARD_ROWS,
    BOARD_COLS,
    CALENDAR_LAYOUT,
    MONTH_COORDS,
    DAY_COORDS,
    ILLEGAL_CELLS,
    Board,
)
from config import settings

CELL_SIZE = settings.cell_size
TOP_BAR_HEIGHT = 120

WINDOW_WIDTH = BOARD_COLS * CELL_SIZE
WINDOW_HEIGHT = BOARD_ROWS * CELL_SIZE + TOP_BAR_HEIGHT

# Colors – dark mode
BG = (15, 15, 17)
CARD_BG = (30, 30, 34)
GRID = (90, 90, 95)
TEXT_MAIN = (245, 245, 250)
TEXT_SECONDARY = (230, 230, 235)
ILLEGAL = (45, 45, 49)

DATE_BORDER = (220, 90, 90)

# Keyed by board label (piece id + 1)
PIECE_COLORS: Dict[int, Tuple[int, int, int]] = {
    1: (230, 25, 75),
    2: (60, 180, 75),
    3: (255, 225, 25),
    4: (67, 99, 216),
    5: (245, 130, 49),
    6: (145, 30, 180),
    7: (70, 240, 240),
    8: (240, 50, 230),
}


def _cell_text(cell: Tuple[int, int]) -> str:
    label = CALENDAR_LAYOUT.label_at(cell) or ""
    if label.startswith("M"):
        return calendar.month_abbr[int(label[1:])].upper()
    return label[1:]


def draw_top_bar(
    screen: pygame.Surface,
    title_font: pygame.font.Font,
    label_font: pygame.font.Font,
    month: int,
    day: int,
    status: str,
):
    pygame.draw.rect(screen, BG, (0, 0, WINDOW_WIDTH, TOP_BAR_HEIGHT))

    card_rect = pygame.Rect(16, 16, WINDOW_WIDTH - 32, TOP_BAR_HEIGHT - 32)
    pygame.draw.rect(screen, CARD_BG, card_rect, border_radius=16)

    title_surf = title_font.render("Calendar Puzzle", True, TEXT_MAIN)
    screen.blit(title_surf, (card_rect.x + 20, card_rect.y + 12))

    date_surf = label_font.render(f"{calendar.month_abbr[month]} {day}", True, TEXT_MAIN)
    date_x = card_rect.right - date_surf.get_width() - 20
    screen.blit(date_surf, (date_x, card_rect.y + 12))

    status_surf = label_font.render(status, True, TEXT_SECONDARY)
    screen.blit(status_surf, (card_rect.x + 20, card_rect.y + 48))


def _blit_centered(screen: pygame.Surface, font: pygame.font.Font, text: str, x: int, y: int):
    surf = font.render(text, True, TEXT_MAIN)
    screen.blit(
        surf,
        (
            x + (CELL_SIZE - surf.get_width()) // 2,
            y + (CELL_SIZE - surf.get_height()) // 2,
        ),
    )


def draw_board(
    screen: pygame.Surface,
    cell_font: pygame.font.Font,
    month: int,
    day: int,
    solution: Board | None = None,
):
    """
    Draws the calendar. Date cells are outlined; with a solution, every
    covered cell is filled with its piece's color.
    """
    date_cells = {MONTH_COORDS[month], DAY_COORDS[day]}

    for r in range(BOARD_ROWS):
        for c in range(BOARD_COLS):
            x = c * CELL_SIZE
            y = TOP_BAR_HEIGHT + r * CELL_SIZE
            rect = pygame.Rect(x + 2, y + 2, CELL_SIZE - 4, CELL_SIZE - 4)

            if (r, c) in ILLEGAL_CELLS:
                pygame.draw.rect(screen, ILLEGAL, rect, border_radius=12)
                continue

            if (r, c) in date_cells:
                pygame.draw.rect(screen, BG, rect, border_radius=12)
                pygame.draw.rect(screen, DATE_BORDER, rect, width=2, border_radius=12)
                _blit_centered(screen, cell_font, _cell_text((r, c)), x, y)
                continue

            label = solution[r][c] if solution is not None else BLOCKED
            if label in PIECE_COLORS:
                pygame.draw.rect(screen, PIECE_COLORS[label], rect, border_radius=12)
            else:
                pygame.draw.rect(screen, BG, rect, border_radius=12)
                pygame.draw.rect(screen, GRID, rect, width=1, border_radius=12)
                _blit_centered(screen, cell_font, _cell_text((r, c)), x, y)
