"""Deterministic, headless rules engine for Pishti.

IMPORTANT: This package must never import pygame.
"""

from .ai import AIView, choose_slot
from .game import Census, GameEngine, GameView, SoundSink, StepResult
from .types import Card, GameState, Level, RuleSet

__all__ = [
    "AIView",
    "Card",
    "Census",
    "GameEngine",
    "GameState",
    "GameView",
    "Level",
    "RuleSet",
    "SoundSink",
    "StepResult",
    "choose_slot",
]
