from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from ..domain.models import Variable


class VariableStore(ABC):
    """
    Defines how steps read and write script variables.
    One store is shared by every block of a running script; the sequencer
    guarantees a single writer at a time, so implementations need no locking.
    """

    @abstractmethod
    def get(self, variable_id: str) -> Optional[str]:
        """Returns the value of a variable, or None if unset or unknown."""
        pass

    @abstractmethod
    def set(self, variable_id: str, value: Optional[str]):
        """Writes a variable value."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Variable]:
        """Looks a variable up by its display name (used by {{name}} placeholders)."""
        pass

    @abstractmethod
    def list(self) -> List[Variable]:
        """Returns every variable with its current value."""
        pass


class InMemoryVariableStore(VariableStore):
    """
    Uses an in-memory dictionary keyed by variable id.
    """

    def __init__(self, variables: Iterable[Variable] = ()):
        self._store: Dict[str, Variable] = {}
        for variable in variables:
            # Copy so the script definition itself is never mutated
            self._store[variable.id] = Variable(
                id=variable.id, name=variable.name, value=variable.value
            )

    def get(self, variable_id: str) -> Optional[str]:
        variable = self._store.get(variable_id)
        return variable.value if variable else None

    def set(self, variable_id: str, value: Optional[str]):
        variable = self._store.get(variable_id)
        if variable is None:
            # Unknown ids are still recorded; the id doubles as the name
            self._store[variable_id] = Variable(id=variable_id, name=variable_id, value=value)
            return
        variable.value = value

    def find_by_name(self, name: str) -> Optional[Variable]:
        return next(
            (variable for variable in self._store.values() if variable.name == name),
            None,
        )

    def list(self) -> List[Variable]:
        return list(self._store.values())

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {variable_id: variable.value for variable_id, variable in self._store.items()}
