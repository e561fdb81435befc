"""
Scoring rules: the value of each frame and the running (cumulative) score.

A strike or spare in frames 1-9 earns the pins of the next two (strike) or next one (spare) rolls as bonus.
Those rolls may span several frames (e.g. strike, strike, 7), so bonus lookups work on the flat sequence of rolls thrown after a frame.
"""

from itertools import islice
from typing import Iterator, Optional, Sequence

from src.bowling.frame import Frame
from src.core.shared_types import PINS_PER_RACK

STRIKE_BONUS_ROLLS = 2
SPARE_BONUS_ROLLS = 1


def rolls_after(frames: Sequence[Frame], index: int) -> Iterator[int]:
    """Pin counts thrown after frames[index], in chronological order and ignoring frame boundaries."""
    for frame in frames[index + 1 :]:
        yield from frame.rolls


def bonus(frames: Sequence[Frame], index: int, n_rolls: int) -> Optional[int]:
    """Sum of the next n_rolls rolls after frames[index]. None if they have not all been thrown yet."""
    next_rolls = list(islice(rolls_after(frames, index), n_rolls))
    if len(next_rolls) < n_rolls:
        return None
    return sum(next_rolls)


def frame_value(frames: Sequence[Frame], index: int) -> Optional[int]:
    """
    Points earned by a single frame (not cumulative).
    ----
    Returns None while the value cannot be determined yet: rolls of the frame itself or the bonus rolls are still missing.
    The final frame never looks ahead. Its bonus is the third roll within the frame.
    """
    frame = frames[index]
    if frame.roll1 is None:
        return None

    if frame.is_final:
        if frame.roll2 is None:
            return None
        if frame.earns_bonus_roll and frame.roll3 is None:
            return None
        return sum(frame.rolls)

    if frame.is_strike:
        strike_bonus = bonus(frames, index, STRIKE_BONUS_ROLLS)
        return None if strike_bonus is None else PINS_PER_RACK + strike_bonus

    if frame.roll2 is None:
        return None

    if frame.is_spare:
        spare_bonus = bonus(frames, index, SPARE_BONUS_ROLLS)
        return None if spare_bonus is None else PINS_PER_RACK + spare_bonus

    # open frame
    return frame.roll1 + frame.roll2


def recalculate_all(frames: Sequence[Frame]) -> None:
    """
    Set the cumulative score of every frame, starting from the first frame every time.

    A frame whose value is still undetermined gets no score and does not add to the running total.
    Recomputing from scratch lets earlier frames resolve once their bonus rolls come in. Calling it twice gives the same scores.
    """
    running_total = 0
    for index, frame in enumerate(frames):
        value = frame_value(frames, index)
        if value is None:
            frame.score = None
            continue
        running_total += value
        frame.score = running_total
