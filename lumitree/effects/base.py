"""
Abstract base class for everything that reacts to the interaction mode.

Every consumer must:
  - implement apply(effects) → None
  - implement reset()
  - declare its NAME class attribute

attach() subscribes to a ModeState and immediately applies its current
mode; detach() unsubscribes so no reference outlives the scene.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Optional

from lumitree.core.effect_mapper import effects_for
from lumitree.core.mode_state import ModeState
from lumitree.domain.enums import InteractionMode
from lumitree.domain.models import EffectParameters


class ModeConsumer(ABC):
    """Base class for all mode consumers."""

    # Override in subclasses for logging
    NAME: str = "UNNAMED_CONSUMER"

    def __init__(self) -> None:
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._effects: EffectParameters = effects_for(InteractionMode.NORMAL)

    # ------------------------------------------------------------------
    def attach(self, mode_state: ModeState) -> None:
        self.detach()
        self._unsubscribe = mode_state.subscribe(self._on_mode)
        self._on_mode(mode_state.current)

    def detach(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    @property
    def effects(self) -> EffectParameters:
        return self._effects

    def _on_mode(self, mode: InteractionMode) -> None:
        self.apply(effects_for(mode))

    # ------------------------------------------------------------------
    @abstractmethod
    def apply(self, effects: EffectParameters) -> None:
        """
        Adopt new animation parameters. Called once per processed frame,
        often with identical values; must be idempotent.
        """

    @abstractmethod
    def reset(self) -> None:
        """Return to the initial scene state."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r}>"
