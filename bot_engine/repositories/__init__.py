from bot_engine.repositories.script import InMemoryScriptRepository, ScriptRepository
from bot_engine.repositories.variables import InMemoryVariableStore, VariableStore

__all__ = [
    "InMemoryScriptRepository",
    "InMemoryVariableStore",
    "ScriptRepository",
    "VariableStore",
]
