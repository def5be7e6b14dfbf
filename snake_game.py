from __future__ import annotations

from typing import Dict, List, Optional

import pygame

from game_loop import GameLoop
from path_utils import get_base_path
from snake_state import (
    DOWN,
    LEFT,
    RIGHT,
    SPEED_OPTIONS,
    UP,
    Direction,
    GameConfig,
    GameState,
    Phase,
    StepOutcome,
    change_direction,
    format_mistakes,
    speed_from_env,
)
from ui_common import draw_card, draw_game_over_ui, draw_text_center

HUD_HEIGHT = 60
BOARD_BACKGROUND = (230, 255, 230)  # 연두색 캔버스
FOOD_COLOR = (255, 0, 0)
HEAD_COLOR = (56, 118, 29)
BODY_COLOR = (0, 128, 0)
SEGMENT_BORDER = (39, 78, 19)
MISTAKE_FLASH = (255, 0, 0)
HUD_BACKGROUND = (245, 245, 247)
FRAME_RATE = 60
FONT_DIR = get_base_path() / "assets" / "fonts"
FONT_FILES = ("neodgm.ttf", "Pretendard-Regular.ttf")
FONT_CANDIDATES = (
    "Pretendard",
    "DejaVu Sans",
    "Arial",
    "Helvetica",
)

KEY_TO_DIRECTION: Dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}
SPEED_KEYS: Dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
}


class SpeedSelector:
    """The speed drop-down: a named choice that maps to a tick interval."""

    def __init__(self, selected: str) -> None:
        self.names: List[str] = list(SPEED_OPTIONS)
        if selected not in SPEED_OPTIONS:
            raise ValueError(f"unknown speed: {selected!r}")
        self.index = self.names.index(selected)

    @property
    def name(self) -> str:
        return self.names[self.index]

    def interval_ms(self) -> int:
        return SPEED_OPTIONS[self.name]

    def select_index(self, index: int) -> None:
        if 0 <= index < len(self.names):
            self.index = index

    def cycle(self, offset: int) -> None:
        self.index = (self.index + offset) % len(self.names)


def load_game_font(size: int) -> pygame.font.Font:
    """Load a bundled font if present, then a system font, then pygame's default."""
    for filename in FONT_FILES:
        path = FONT_DIR / filename
        if path.exists():
            try:
                return pygame.font.Font(path.as_posix(), size)
            except OSError:
                pass

    for candidate in FONT_CANDIDATES:
        font_name = pygame.font.match_font(candidate)
        if font_name:
            return pygame.font.Font(font_name, size)

    return pygame.font.Font(None, size)


def draw_board(surface: pygame.Surface, state: GameState, config: GameConfig) -> None:
    """Paint the playfield: background, food, then the snake head first."""
    tile = config.tile_size
    surface.fill(BOARD_BACKGROUND)

    if state.food is not None:
        pygame.draw.rect(surface, FOOD_COLOR, pygame.Rect(state.food[0], state.food[1], tile, tile))

    for idx, segment in enumerate(state.snake):
        rect = pygame.Rect(segment[0], segment[1], tile, tile)
        pygame.draw.rect(surface, HEAD_COLOR if idx == 0 else BODY_COLOR, rect)
        pygame.draw.rect(surface, SEGMENT_BORDER, rect, width=1)


def draw_mistake_flash(surface: pygame.Surface) -> None:
    surface.fill(MISTAKE_FLASH)


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    state: Optional[GameState],
    config: GameConfig,
    speed_name: str,
) -> None:
    """Render score, mistakes and selected speed above the board."""
    panel_rect = pygame.Rect(0, 0, surface.get_width(), HUD_HEIGHT)
    pygame.draw.rect(surface, HUD_BACKGROUND, panel_rect)
    pygame.draw.line(surface, SEGMENT_BORDER, (0, HUD_HEIGHT - 1), (panel_rect.right, HUD_HEIGHT - 1), 2)

    score = state.score if state is not None else 0
    mistakes = format_mistakes(state, config) if state is not None else f"0 / {config.max_mistakes}"
    left_text = font.render(f"Score: {score}", True, (30, 30, 30))
    mid_text = font.render(f"Mistakes: {mistakes}", True, (30, 30, 30))
    right_text = font.render(speed_name, True, (90, 90, 90))

    y = (HUD_HEIGHT - left_text.get_height()) // 2
    surface.blit(left_text, (12, y))
    surface.blit(mid_text, mid_text.get_rect(midtop=(panel_rect.centerx, y)))
    surface.blit(right_text, (panel_rect.right - right_text.get_width() - 12, y))


def draw_title(
    surface: pygame.Surface,
    *,
    font_title: pygame.font.Font,
    font: pygame.font.Font,
    font_small: pygame.font.Font,
    selector: SpeedSelector,
    start_button: pygame.Rect,
) -> None:
    """Title card with the speed choices and a start button."""
    surface.fill(BOARD_BACKGROUND)
    w = surface.get_width()
    draw_text_center(surface, font_title, "Snake", 110)
    draw_text_center(surface, font_small, "Walls and your own tail cost a mistake.", 150, color=(60, 60, 60))

    slot_w = 100
    left = (w - slot_w * len(selector.names) - 10 * (len(selector.names) - 1)) // 2
    for idx, name in enumerate(selector.names):
        rect = pygame.Rect(left + idx * (slot_w + 10), 200, slot_w, 40)
        draw_card(surface, rect, highlight=idx == selector.index)
        color = (20, 20, 20) if idx == selector.index else (110, 110, 110)
        label = font.render(f"{idx + 1}. {name}", True, color)
        surface.blit(label, label.get_rect(center=rect.center))

    draw_card(surface, start_button)
    start = font.render("Start", True, (20, 20, 20))
    surface.blit(start, start.get_rect(center=start_button.center))
    draw_text_center(surface, font_small, "ENTER: start  |  1-3: speed  |  ESC: quit", surface.get_height() - 24, color=(70, 70, 70))


def handle_keydown(key: int, loop: GameLoop, selector: SpeedSelector) -> bool:
    """Apply one key press. Returns False when the player asked to quit."""
    if key == pygame.K_ESCAPE:
        return False
    if key in SPEED_KEYS:
        selector.select_index(SPEED_KEYS[key])
        return True

    phase = loop.phase
    if key == pygame.K_r or (key in (pygame.K_RETURN, pygame.K_SPACE) and phase in (Phase.IDLE, Phase.GAME_OVER)):
        loop.start()
        return True

    if phase in (Phase.IDLE, Phase.GAME_OVER):
        # 타이틀/게임오버 화면에서는 좌우 키로 속도를 고른다.
        if key in (pygame.K_LEFT, pygame.K_a):
            selector.cycle(-1)
        elif key in (pygame.K_RIGHT, pygame.K_d):
            selector.cycle(1)
        return True

    direction = KEY_TO_DIRECTION.get(key)
    if direction is not None and loop.state is not None:
        change_direction(loop.state, direction)
    return True


def run_game(*, quit_on_exit: bool = True, config: Optional[GameConfig] = None) -> None:
    """Open the window and play until ESC or the window is closed."""
    config = config or GameConfig.from_env()
    selector = SpeedSelector(speed_from_env())

    pygame.init()
    pygame.display.set_caption("Snake")
    screen = pygame.display.set_mode((config.canvas_size, config.canvas_size + HUD_HEIGHT))
    clock = pygame.time.Clock()
    font_title = load_game_font(40)
    font = load_game_font(20)
    font_small = load_game_font(15)

    board = pygame.Surface((config.canvas_size, config.canvas_size))
    board.fill(BOARD_BACKGROUND)
    loop = GameLoop(
        config,
        selector.interval_ms,
        clock=pygame.time.get_ticks,
        on_draw=lambda state: draw_board(board, state, config),
    )
    start_button = pygame.Rect((config.canvas_size - 160) // 2, 280, 160, 52)

    running = True
    while running:
        clock.tick(FRAME_RATE)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                running = handle_keydown(event.key, loop, selector)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and loop.phase is Phase.IDLE:
                mx, my = event.pos
                if start_button.collidepoint(mx, my - HUD_HEIGHT):
                    loop.start()
            if not running:
                break

        if loop.poll() is StepOutcome.MISTAKE:
            # 실수하면 재개될 때까지 판을 빨갛게 덮어둔다.
            draw_mistake_flash(board)

        draw_hud(screen, font, loop.state, config, selector.name)
        if loop.phase is Phase.IDLE:
            title_area = screen.subsurface(pygame.Rect(0, HUD_HEIGHT, config.canvas_size, config.canvas_size))
            draw_title(
                title_area,
                font_title=font_title,
                font=font,
                font_small=font_small,
                selector=selector,
                start_button=start_button,
            )
        else:
            screen.blit(board, (0, HUD_HEIGHT))
            if loop.phase is Phase.GAME_OVER and loop.state is not None:
                draw_game_over_ui(
                    screen,
                    font_title=font_title,
                    font=font,
                    font_small=font_small,
                    reason=f"Mistakes: {format_mistakes(loop.state, config)}",
                    score=loop.state.score,
                    hint="R / ENTER: play again  |  ESC: quit",
                )

        pygame.display.flip()

    loop.stop()
    if quit_on_exit:
        pygame.quit()


if __name__ == "__main__":
    run_game()
