from __future__ import annotations

import pygame


def draw_overlay(surface: pygame.Surface, *, alpha: int = 120) -> None:
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, max(0, min(255, alpha))))
    surface.blit(overlay, (0, 0))


def draw_card(surface: pygame.Surface, rect: pygame.Rect, *, highlight: bool = False) -> None:
    # 흰색 카드 + 검은 테두리 + 살짝 그림자
    shadow = pygame.Surface((rect.width + 10, rect.height + 10), pygame.SRCALPHA)
    pygame.draw.rect(shadow, (0, 0, 0, 40), shadow.get_rect(), border_radius=14)
    surface.blit(shadow, (rect.x - 5, rect.y - 3))

    fill = (230, 255, 230) if highlight else (255, 255, 255)
    pygame.draw.rect(surface, fill, rect, border_radius=14)
    pygame.draw.rect(surface, (40, 40, 40), rect, width=2, border_radius=14)


def draw_text_center(surface: pygame.Surface, font: pygame.font.Font, text: str, y: int, *, color=(20, 20, 20)) -> None:
    rendered = font.render(text, True, color)
    rect = rendered.get_rect(center=(surface.get_width() // 2, y))
    surface.blit(rendered, rect)


def draw_game_over_ui(
    surface: pygame.Surface,
    *,
    font_title: pygame.font.Font,
    font: pygame.font.Font,
    font_small: pygame.font.Font,
    reason: str,
    score: int,
    hint: str,
) -> pygame.Rect:
    """Game-over overlay: dimmed background, card, reason, final score, hint."""
    draw_overlay(surface, alpha=120)

    w, h = surface.get_size()
    card_w = min(360, w - 24)
    card = pygame.Rect((w - card_w) // 2, max(12, (h - 220) // 2), card_w, 220)
    draw_card(surface, card)

    draw_text_center(surface, font_title, "Game Over", card.top + 40, color=(20, 20, 20))
    draw_text_center(surface, font, reason, card.top + 80, color=(60, 60, 60))
    draw_text_center(surface, font, f"Your Final Score: {score}", card.top + 130, color=(35, 35, 35))
    draw_text_center(surface, font_small, hint, card.top + 185, color=(70, 70, 70))
    return card
