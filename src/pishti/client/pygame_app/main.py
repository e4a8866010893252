from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from pishti.paths import get_paths
from pishti.services.content import ContentService
from pishti.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="pishti")
    parser.add_argument("--width", type=int, default=480)
    parser.add_argument("--height", type=int, default=640)
    parser.add_argument("--seed", type=int, default=None, help="fix shuffles and computer choices")
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Pishti")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir)
    icon = assets.get_image("ui/icon.png", size=(32, 32))
    pygame.display.set_icon(icon)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir),
        telemetry=TelemetryService(paths.telemetry_path, enabled=not args.no_telemetry),
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    code = app.run()
    pygame.quit()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
