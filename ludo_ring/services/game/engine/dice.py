"""Dice sources for the turn controller."""

import logging
import random
from collections.abc import Iterable
from typing import Protocol

logger = logging.getLogger(__name__)

DIE_FACES = 6


class DiceExhaustedError(RuntimeError):
    """A scripted dice source has no pairs left."""


class DiceSource(Protocol):
    def roll(self) -> tuple[int, int]: ...


class Dice:
    """Two independent fair six-sided dice.

    Args:
        rng: Randomness source. An int is used as a seed; None seeds from the OS.
    """

    def __init__(self, rng: random.Random | int | None = None):
        if isinstance(rng, random.Random):
            self._rng = rng
        else:
            self._rng = random.Random(rng)

    def roll(self) -> tuple[int, int]:
        dice1 = self._rng.randint(1, DIE_FACES)
        dice2 = self._rng.randint(1, DIE_FACES)
        logger.debug("Dice rolled: %d, %d", dice1, dice2)
        return dice1, dice2


class ScriptedDice:
    """Replays a fixed sequence of dice pairs, in order."""

    def __init__(self, pairs: Iterable[tuple[int, int]]):
        self._pairs = list(pairs)
        for dice1, dice2 in self._pairs:
            if not (1 <= dice1 <= DIE_FACES and 1 <= dice2 <= DIE_FACES):
                raise ValueError(f"Dice values must be 1-{DIE_FACES}, got ({dice1}, {dice2})")
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._pairs) - self._cursor

    def push(self, dice1: int, dice2: int) -> None:
        """Append a pair to the end of the script."""
        if not (1 <= dice1 <= DIE_FACES and 1 <= dice2 <= DIE_FACES):
            raise ValueError(f"Dice values must be 1-{DIE_FACES}, got ({dice1}, {dice2})")
        self._pairs.append((dice1, dice2))

    def roll(self) -> tuple[int, int]:
        if self._cursor >= len(self._pairs):
            raise DiceExhaustedError(f"Scripted dice exhausted after {len(self._pairs)} rolls")
        pair = self._pairs[self._cursor]
        self._cursor += 1
        return pair
