"""
Execution Layer - Block Sequencing and Step Execution

Defines the BlockSequencer (deterministic state machine) and the executors it
delegates to: LogicExecutor, IntegrationExecutor and single choice resolution.
"""

from bot_engine.execution.choice import get_single_choice_edge_id
from bot_engine.execution.exceptions import BlockStateError, BotEngineError, IntegrationError
from bot_engine.execution.integration import IntegrationExecutor
from bot_engine.execution.logic import LogicExecutor
from bot_engine.execution.sequencer import BlockSequencer


__all__ = [
    "BlockSequencer",
    "BlockStateError",
    "BotEngineError",
    "IntegrationError",
    "IntegrationExecutor",
    "LogicExecutor",
    "get_single_choice_edge_id",
]
