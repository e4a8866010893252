from __future__ import annotations

import os
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]

from pishti.engine.types import Card, build_deck


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


SUIT_COLORS: dict[str, tuple[int, int, int]] = {
    "Hearts": (190, 30, 40),
    "Diamonds": (200, 80, 20),
    "Clubs": (20, 20, 20),
    "Spades": (40, 40, 90),
}

SUIT_GLYPHS: dict[str, str] = {"Hearts": "H", "Diamonds": "D", "Clubs": "C", "Spades": "S"}

SHORT_FACES: dict[str, str] = {
    "Ace": "A",
    "Deuce": "2",
    "Three": "3",
    "Four": "4",
    "Five": "5",
    "Six": "6",
    "Seven": "7",
    "Eight": "8",
    "Nine": "9",
    "Ten": "10",
    "Jack": "J",
    "Queen": "Q",
    "King": "K",
}

SIZE = (71, 96)


def generate_all() -> None:
    root = _repo_root()
    assets_dir = root / "assets"
    cards_dir = assets_dir / "cards"
    ui_dir = assets_dir / "ui"
    cards_dir.mkdir(parents=True, exist_ok=True)
    ui_dir.mkdir(parents=True, exist_ok=True)

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 30)
    font_small = pygame.font.SysFont(None, 16)

    for card in build_deck():
        surf = _render_card(card, font, font_small)
        pygame.image.save(surf, (cards_dir / f"{card.identifier}.png").as_posix())

    back = pygame.Surface(SIZE)
    back.fill((245, 245, 245))
    pygame.draw.rect(back, (30, 60, 140), pygame.Rect(4, 4, SIZE[0] - 8, SIZE[1] - 8), border_radius=6)
    for y in range(10, SIZE[1] - 10, 8):
        pygame.draw.line(back, (70, 110, 190), (8, y), (SIZE[0] - 9, y), 2)
    pygame.image.save(back, (cards_dir / "back.png").as_posix())

    _make_icon(ui_dir / "icon.png")

    pygame.quit()
    print("Generated placeholder assets under ./assets/")


def _render_card(card: Card, font: pygame.font.Font, font_small: pygame.font.Font) -> pygame.Surface:
    color = SUIT_COLORS[card.suit]
    surf = pygame.Surface(SIZE)
    surf.fill((250, 250, 245))
    pygame.draw.rect(surf, (0, 0, 0), pygame.Rect(0, 0, SIZE[0], SIZE[1]), width=2, border_radius=6)

    label = f"{SHORT_FACES[card.face]}{SUIT_GLYPHS[card.suit]}"
    title = font.render(label, True, color)
    surf.blit(title, title.get_rect(center=(SIZE[0] // 2, SIZE[1] // 2)).topleft)

    corner = font_small.render(card.face, True, color)
    surf.blit(corner, (5, 5))
    return surf


def _make_icon(path: Path) -> None:
    surf = pygame.Surface((48, 48), pygame.SRCALPHA)
    pygame.draw.circle(surf, (30, 120, 60), (24, 24), 22)
    pygame.draw.circle(surf, (0, 0, 0), (24, 24), 22, width=3)
    font = pygame.font.SysFont(None, 28)
    txt = font.render("P", True, (250, 240, 200))
    surf.blit(txt, txt.get_rect(center=(24, 24)).topleft)
    pygame.image.save(surf, path.as_posix())


if __name__ == "__main__":
    generate_all()
