"""Calendar puzzle host.

Usage::

    python main.py                      # pygame window, today's date
    python main.py --headless --month 2 --day 30
    python main.py --headless --all --month 1 --day 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

import pygame

from board import build_board, format_board
from config import settings
from driver import SearchDriver
from gui import WINDOW_WIDTH, WINDOW_HEIGHT, BG, draw_board, draw_top_bar
from messages import MessageKind
from solver import AttemptCounter, solve_for_date
from ui_state import AppState, UIState

logger = logging.getLogger(__name__)


def run_headless(month: int, day: int, find_all: bool, prune: bool) -> int:
    if find_all:
        counter = AttemptCounter()
        solutions = solve_for_date(month, day, find_all=True, counter=counter)
        for i, board in enumerate(solutions, 1):
            print(f"Solution {i}")
            print(format_board(board))
            print()
        print(f"{len(solutions)} solutions, {counter.count:,} attempts")
        return 0 if solutions else 1

    with SearchDriver(prune=prune) as driver:
        driver.submit(month, day)
        for message in driver.messages():
            if message.kind == MessageKind.PROGRESS:
                print(f"... {message.attempts:,} attempts", file=sys.stderr)
            elif message.kind == MessageKind.SOLVED:
                print(format_board(message.board))
                print(f"Solved in {message.attempts:,} attempts")
                return 0
            elif message.kind == MessageKind.UNSOLVED:
                print(format_board(build_board(month, day)))
                print(f"No solution ({message.attempts:,} attempts)")
                return 1
            else:
                print(f"Search failed: {message.error}", file=sys.stderr)
                return 2
    return 2


def run_window(month: int, day: int, prune: bool) -> int:
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("Calendar Puzzle")

    title_font = pygame.font.SysFont("SF Pro Display", 32, bold=True)
    label_font = pygame.font.SysFont("SF Pro Text", 22)
    cell_font = pygame.font.SysFont("SF Pro Text", 20, bold=True)

    clock = pygame.time.Clock()
    app_state = AppState(month, day)
    driver = SearchDriver(prune=prune)

    running = True
    while running:
        clock.tick(30)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
                    driver.cancel()
                    app_state.shift_day(1 if event.key == pygame.K_RIGHT else -1)
                elif event.key in (pygame.K_UP, pygame.K_DOWN):
                    driver.cancel()
                    app_state.shift_month(1 if event.key == pygame.K_UP else -1)
                elif event.key == pygame.K_RETURN:
                    app_state.start(driver.submit(app_state.month, app_state.day))

        if app_state.current_state == UIState.SOLVING:
            for message in driver.poll():
                app_state.apply(message)

        screen.fill(BG)
        draw_top_bar(
            screen, title_font, label_font, app_state.month, app_state.day, app_state.status_text()
        )
        draw_board(screen, cell_font, app_state.month, app_state.day, app_state.board)
        pygame.display.flip()

    driver.close()
    pygame.quit()
    return 0


def main(argv: list[str] | None = None) -> int:
    today = date.today()
    parser = argparse.ArgumentParser(description="Calendar puzzle solver")
    parser.add_argument("--month", type=int, default=today.month, choices=range(1, 13))
    parser.add_argument("--day", type=int, default=today.day, choices=range(1, 32))
    parser.add_argument("--headless", action="store_true", help="Print to the terminal instead of opening a window")
    parser.add_argument("--all", action="store_true", default=settings.find_all, help="Enumerate every solution (headless)")
    parser.add_argument("--prune", action="store_true", default=settings.prune_islands, help="Skip boards with unfillable regions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    if args.headless:
        return run_headless(args.month, args.day, args.all, args.prune)
    return run_window(args.month, args.day, args.prune)


if __name__ == "__main__":
    sys.exit(main())
