"""
Transition Types - Block State Machine Definitions

Type definitions for the block sequencer state machine.
Used by the sequencer to classify what happened after a step was concluded.
"""

from enum import Enum, auto

from ...state.models import BlockStatus


class StepTransition(Enum):
    """
    What happened to the cursor after a step was concluded.
    This decouples the sequencer loop from the kind of step being handled.
    """

    ADVANCE = auto()  # The cursor moved to the next step of the block.
    EXIT = auto()  # The block ended through on_block_end.
    STALL = auto()  # The next step id did not resolve.


__all__ = ["BlockStatus", "StepTransition"]
