import pygame
import pytest

from game_loop import GameLoop
from snake_game import (
    BOARD_BACKGROUND,
    BODY_COLOR,
    FOOD_COLOR,
    HEAD_COLOR,
    HUD_BACKGROUND,
    HUD_HEIGHT,
    MISTAKE_FLASH,
    SEGMENT_BORDER,
    SpeedSelector,
    draw_board,
    draw_hud,
    draw_mistake_flash,
    draw_title,
    handle_keydown,
)
from snake_state import LEFT, RIGHT, UP, GameConfig, GameState, Phase, StepOutcome
from ui_common import draw_game_over_ui, draw_overlay


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


@pytest.fixture
def fonts():
    pygame.font.init()
    yield pygame.font.Font(None, 32), pygame.font.Font(None, 20), pygame.font.Font(None, 16)
    pygame.font.quit()


@pytest.fixture
def selector():
    return SpeedSelector("Normal")


@pytest.fixture
def loop(fake_clock, rng, selector):
    return GameLoop(GameConfig(), selector.interval_ms, clock=fake_clock, rng=rng)


def test_speed_selector(selector):
    assert selector.name == "Normal"
    assert selector.interval_ms() == 100

    selector.select_index(2)
    assert selector.name == "Fast"
    assert selector.interval_ms() == 60

    selector.select_index(9)
    assert selector.name == "Fast"

    selector.cycle(1)
    assert selector.name == "Slow"
    assert selector.interval_ms() == 150


def test_speed_selector_rejects_unknown_name():
    with pytest.raises(ValueError):
        SpeedSelector("Turbo")


def test_escape_quits(loop, selector):
    assert handle_keydown(pygame.K_ESCAPE, loop, selector) is False


def test_enter_starts_from_title(loop, selector):
    assert loop.phase is Phase.IDLE
    assert handle_keydown(pygame.K_RETURN, loop, selector) is True
    assert loop.phase is Phase.RUNNING


def test_number_keys_pick_speed(loop, selector):
    handle_keydown(pygame.K_3, loop, selector)
    assert selector.name == "Fast"
    handle_keydown(pygame.K_1, loop, selector)
    assert selector.name == "Slow"


def test_arrows_pick_speed_on_title(loop, selector):
    handle_keydown(pygame.K_RIGHT, loop, selector)
    assert selector.name == "Fast"
    handle_keydown(pygame.K_LEFT, loop, selector)
    assert selector.name == "Normal"
    assert loop.state is None


def test_arrows_steer_while_playing(loop, selector):
    loop.start()
    handle_keydown(pygame.K_LEFT, loop, selector)
    assert loop.state.direction == RIGHT

    handle_keydown(pygame.K_UP, loop, selector)
    assert loop.state.direction == UP

    loop.tick()
    handle_keydown(pygame.K_a, loop, selector)
    assert loop.state.direction == LEFT
    assert selector.name == "Normal"


def test_quick_double_turn_does_not_fold_back(loop, selector, fake_clock):
    state = loop.start()
    state.food = (0, 0)

    handle_keydown(pygame.K_UP, loop, selector)
    handle_keydown(pygame.K_LEFT, loop, selector)
    fake_clock.advance(100)

    assert loop.poll() is StepOutcome.MOVED
    assert state.head == (200, 180)
    assert state.mistakes == 0


def test_enter_does_not_restart_running_game(loop, selector):
    state = loop.start()
    handle_keydown(pygame.K_RETURN, loop, selector)
    assert loop.state is state


def test_r_restarts_any_time(loop, selector):
    state = loop.start()
    state.score = 5
    handle_keydown(pygame.K_r, loop, selector)
    assert loop.state is not state
    assert loop.state.score == 0


def test_draw_board_paints_food_and_snake():
    config = GameConfig()
    surface = pygame.Surface((config.canvas_size, config.canvas_size))
    state = GameState(snake=[(200, 200), (180, 200), (160, 200)], food=(0, 0))

    draw_board(surface, state, config)

    assert rgb(surface, (10, 10)) == FOOD_COLOR
    assert rgb(surface, (210, 210)) == HEAD_COLOR
    assert rgb(surface, (190, 210)) == BODY_COLOR
    assert rgb(surface, (160, 200)) == SEGMENT_BORDER
    assert rgb(surface, (300, 300)) == BOARD_BACKGROUND


def test_mistake_flash_covers_board():
    surface = pygame.Surface((400, 400))
    draw_mistake_flash(surface)
    assert rgb(surface, (0, 0)) == MISTAKE_FLASH
    assert rgb(surface, (399, 399)) == MISTAKE_FLASH


def test_screens_render_headless(fonts, selector):
    font_title, font, font_small = fonts
    config = GameConfig()
    screen = pygame.Surface((config.canvas_size, config.canvas_size + HUD_HEIGHT))
    state = GameState(snake=[(200, 200), (180, 200), (160, 200)], food=(0, 0), mistakes=3, phase=Phase.GAME_OVER)

    draw_hud(screen, font, state, config, selector.name)
    assert rgb(screen, (2, 2)) == HUD_BACKGROUND

    draw_hud(screen, font, None, config, selector.name)
    title_area = screen.subsurface(pygame.Rect(0, HUD_HEIGHT, config.canvas_size, config.canvas_size))
    draw_title(
        title_area,
        font_title=font_title,
        font=font,
        font_small=font_small,
        selector=selector,
        start_button=pygame.Rect(120, 280, 160, 52),
    )

    card = draw_game_over_ui(
        screen,
        font_title=font_title,
        font=font,
        font_small=font_small,
        reason="Mistakes: 10 / 10",
        score=state.score,
        hint="R: play again",
    )
    assert screen.get_rect().contains(card)


def test_overlay_dims_the_screen():
    surface = pygame.Surface((40, 40))
    surface.fill((255, 255, 255))
    draw_overlay(surface, alpha=120)
    r, g, b = rgb(surface, (20, 20))
    assert r == g == b
    assert 120 < r < 150
