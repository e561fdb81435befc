"""
A single frame of a player's game.

Knows when its roll sequence is complete and how many pins the next roll can knock down.
Frames 1-9 hold at most two rolls (a strike ends the frame after one). The final frame grants a third roll after a strike or a spare.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    InvalidPinCountError,
    NoBonusRollAllowedError,
)
from src.core.models import FrameModel
from src.core.shared_types import FRAMES_PER_GAME, PINS_PER_RACK


@dataclass
class Frame:
    frame_number: int
    roll1: Optional[int] = None
    roll2: Optional[int] = None
    roll3: Optional[int] = None
    score: Optional[int] = None  # cumulative, None while it depends on rolls not yet thrown

    @classmethod
    def from_model(cls, model: FrameModel) -> Self:
        return cls(
            frame_number=model.frame_number,
            roll1=model.roll1,
            roll2=model.roll2,
            roll3=model.roll3,
            score=model.score,
        )

    def to_model(self) -> FrameModel:
        return FrameModel(
            frame_number=self.frame_number,
            roll1=self.roll1,
            roll2=self.roll2,
            roll3=self.roll3,
            score=self.score,
        )

    @property
    def is_final(self) -> bool:
        return self.frame_number == FRAMES_PER_GAME

    @property
    def rolls(self) -> list[int]:
        """Pin counts thrown so far, in the order they were thrown."""
        return [pins for pins in (self.roll1, self.roll2, self.roll3) if pins is not None]

    @property
    def is_strike(self) -> bool:
        return self.roll1 == PINS_PER_RACK

    @property
    def is_spare(self) -> bool:
        """
        All pins down with the first two rolls.
        NOTE in the final frame a strike followed by a gutter ball (10, 0) also adds up to 10. Use together with is_strike.
        """
        if self.roll1 is None or self.roll2 is None:
            return False
        return self.roll1 + self.roll2 == PINS_PER_RACK

    @property
    def earns_bonus_roll(self) -> bool:
        """Only for the final frame: a strike or spare in the first two rolls grants a third."""
        return self.is_final and (self.is_strike or self.is_spare)

    @property
    def is_complete(self) -> bool:
        if not self.is_final:
            # Strike completes the frame, otherwise two rolls do
            if self.is_strike:
                return True
            return self.roll1 is not None and self.roll2 is not None

        if self.roll1 is None or self.roll2 is None:
            return False
        if self.earns_bonus_roll:
            return self.roll3 is not None
        return True

    def max_pins_next_roll(self) -> int:
        """
        Upper bound on the pins the next roll in this frame can knock down.
        ----
        In the final frame the rack is reset after a strike and after a spare,
        so the ceiling depends on what happened earlier in the frame.
        """
        if self.roll1 is None:
            return PINS_PER_RACK

        if self.roll2 is None:
            if self.is_final and self.is_strike:
                return PINS_PER_RACK
            return PINS_PER_RACK - self.roll1

        if not self.earns_bonus_roll:
            raise NoBonusRollAllowedError(
                f"No bonus roll allowed in frame {self.frame_number}: neither a strike nor a spare was rolled."
            )

        # strike, then some pins left standing: the third ball goes at the remaining pins
        if self.is_strike and self.roll2 != PINS_PER_RACK:
            return PINS_PER_RACK - self.roll2
        return PINS_PER_RACK

    def record_roll(self, pins: int) -> None:
        """
        Validate the pin count and store it in the first empty roll slot.
        Nothing is changed when the roll is rejected.
        """
        if self.is_complete:
            if self.is_final and not self.earns_bonus_roll:
                raise NoBonusRollAllowedError(
                    f"No bonus roll allowed in frame {self.frame_number}: neither a strike nor a spare was rolled."
                )
            raise GameStateError(
                f"Frame {self.frame_number} is already complete. Cannot record another roll."
            )

        max_allowed = self.max_pins_next_roll()
        if pins < 0 or pins > max_allowed:
            raise InvalidPinCountError(pins, max_allowed)

        if self.roll1 is None:
            self.roll1 = pins
        elif self.roll2 is None:
            self.roll2 = pins
        else:
            self.roll3 = pins
