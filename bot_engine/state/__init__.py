"""
State Layer - Runtime Data Models

Defines the runtime snapshot model that exposes the progress of a block
instance to the host application.
"""

from bot_engine.state.models import BlockSnapshot, BlockStatus

__all__ = [
    "BlockSnapshot",
    "BlockStatus",
]
