"""Shared test fixtures for the bot engine test suite."""

from typing import Callable, Dict, Iterable, List, Optional
from unittest.mock import MagicMock

import pytest

from bot_engine.domain.models import (
    BubbleStepType,
    ChoiceItem,
    Script,
    Step,
    Variable,
)
from bot_engine.execution.sequencer import BlockSequencer
from bot_engine.repositories.script import InMemoryScriptRepository
from bot_engine.repositories.variables import InMemoryVariableStore


def bubble(step_id: str, edge_id: Optional[str] = None, content: str = "Hello") -> Step:
    return Step(
        id=step_id,
        block_id="block_1",
        type=BubbleStepType.TEXT,
        content=content,
        edge_id=edge_id,
    )


def make_script(
    steps: Iterable[Step],
    choice_items: Iterable[ChoiceItem] = (),
    variables: Iterable[Variable] = (),
) -> Script:
    return Script(
        id="script_1",
        name="Test script",
        steps={step.id: step for step in steps},
        choice_items={item.id: item for item in choice_items},
        variables=list(variables),
    )


@pytest.fixture
def variables() -> InMemoryVariableStore:
    return InMemoryVariableStore(
        [
            Variable(id="var_name", name="Name"),
            Variable(id="var_age", name="Age"),
            Variable(id="var_city", name="City", value="Paris"),
        ]
    )


@pytest.fixture
def on_block_end() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_sequencer(
    variables: InMemoryVariableStore, on_block_end: MagicMock
) -> Callable[..., BlockSequencer]:
    """Factory fixture building a sequencer over the given steps.

    Usage:
        sequencer = make_sequencer([bubble("s1"), bubble("s2")])
        sequencer = make_sequencer(steps, step_ids=["s2"], start_step_id="s2")
    """

    def _make(
        steps: List[Step],
        step_ids: Optional[List[str]] = None,
        choice_items: Iterable[ChoiceItem] = (),
        **kwargs,
    ) -> BlockSequencer:
        script = make_script(steps, choice_items)
        return BlockSequencer(
            script=InMemoryScriptRepository(script),
            variables=variables,
            step_ids=step_ids if step_ids is not None else [step.id for step in steps],
            on_block_end=on_block_end,
            **kwargs,
        )

    return _make


@pytest.fixture
def written() -> Dict[str, Optional[str]]:
    """Collects writes made through a write_variable callback."""
    return {}


@pytest.fixture
def write_variable(written: Dict[str, Optional[str]], variables: InMemoryVariableStore):
    def _write(variable_id: str, value: Optional[str]):
        written[variable_id] = value
        variables.set(variable_id, value)

    return _write
