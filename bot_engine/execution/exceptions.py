"""
Execution Layer Exceptions

Custom exceptions for the block sequencer and its executors.
"""


class BotEngineError(Exception):
    """Base class for errors raised by the engine."""
    pass


class IntegrationError(BotEngineError):
    """Raised when an integration step could not perform its external call."""

    def __init__(self, step_id: str, message: str):
        super().__init__(f"Integration step '{step_id}' failed: {message}")
        self.step_id = step_id


class BlockStateError(BotEngineError):
    """Raised when a block sequencer is driven out of order (e.g. started twice)."""
    pass
