"""
Bot Engine

The step-sequencing and branching core of a conversational bot: walks the
steps of a block, runs logic and integration steps, waits for answers and
decides which edge ends the block.
"""

from bot_engine.domain import (
    Block,
    ChoiceItem,
    Edge,
    Script,
    Step,
    Target,
    Variable,
)
from bot_engine.state import (
    BlockSnapshot,
    BlockStatus,
)
from bot_engine.repositories import (
    InMemoryScriptRepository,
    InMemoryVariableStore,
    ScriptRepository,
    VariableStore,
)
from bot_engine.execution import (
    BlockSequencer,
    IntegrationError,
    IntegrationExecutor,
    LogicExecutor,
    get_single_choice_edge_id,
)

__all__ = [
    # Domain Layer
    "Block",
    "ChoiceItem",
    "Edge",
    "Script",
    "Step",
    "Target",
    "Variable",
    # State Layer
    "BlockSnapshot",
    "BlockStatus",
    # Repositories
    "InMemoryScriptRepository",
    "InMemoryVariableStore",
    "ScriptRepository",
    "VariableStore",
    # Execution Layer
    "BlockSequencer",
    "IntegrationError",
    "IntegrationExecutor",
    "LogicExecutor",
    "get_single_choice_edge_id",
]
