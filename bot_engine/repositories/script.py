from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..domain.models import Block, ChoiceItem, Edge, Script, Step


# The Interface
class ScriptRepository(ABC):
    """
    Defines how the engine reads the script graph.
    The graph is loaded by the host; the engine only ever looks things up,
    so implementations may be backed by memory, a database or an API.

    The plain getters return None for unknown ids. The require_* helpers
    raise ValueError instead.
    """

    @abstractmethod
    def get_step(self, step_id: Optional[str]) -> Optional[Step]:
        pass

    @abstractmethod
    def get_edge(self, edge_id: Optional[str]) -> Optional[Edge]:
        pass

    @abstractmethod
    def get_block(self, block_id: Optional[str]) -> Optional[Block]:
        pass

    @abstractmethod
    def get_choice_items(self) -> Dict[str, ChoiceItem]:
        """Returns all choice items of the script, indexed by id."""
        pass

    def get_choice_item(self, item_id: Optional[str]) -> Optional[ChoiceItem]:
        if item_id is None:
            return None
        return self.get_choice_items().get(item_id)

    def require_step(self, step_id: str) -> Step:
        step = self.get_step(step_id)
        if step is None:
            raise ValueError(f"Step '{step_id}' not found.")
        return step

    def require_edge(self, edge_id: str) -> Edge:
        edge = self.get_edge(edge_id)
        if edge is None:
            raise ValueError(f"Edge '{edge_id}' not found.")
        return edge

    def require_block(self, block_id: str) -> Block:
        block = self.get_block(block_id)
        if block is None:
            raise ValueError(f"Block '{block_id}' not found.")
        return block


class InMemoryScriptRepository(ScriptRepository):
    """
    Serves a Script object already held in memory.
    """

    def __init__(self, script: Script):
        self.script = script

    def get_step(self, step_id: Optional[str]) -> Optional[Step]:
        if step_id is None:
            return None
        return self.script.steps.get(step_id)

    def get_edge(self, edge_id: Optional[str]) -> Optional[Edge]:
        if edge_id is None:
            return None
        return self.script.edges.get(edge_id)

    def get_block(self, block_id: Optional[str]) -> Optional[Block]:
        if block_id is None:
            return None
        return self.script.blocks.get(block_id)

    def get_choice_items(self) -> Dict[str, ChoiceItem]:
        return self.script.choice_items
