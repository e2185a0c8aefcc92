"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the engine's services.
It is responsible for:
1. Instantiating the shared singletons (HTTP client, executors).
2. Wiring them into new BlockSequencer instances.
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

Hosts that need different collaborators (tests, custom redirect handling)
pass their own executors to create_block_sequencer() instead.
"""


from functools import lru_cache
from typing import Optional, Sequence

import httpx

from .config import settings
from .execution.integration import IntegrationExecutor
from .execution.logic import LogicExecutor
from .execution.sequencer import BlockEndCallback, BlockSequencer
from .repositories.script import ScriptRepository
from .repositories.variables import VariableStore

# HTTP Client (Singleton)
@lru_cache()
def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.WEBHOOK_TIMEOUT,
        headers={"User-Agent": settings.WEBHOOK_USER_AGENT},
    )

# Logic Executor (Singleton)
@lru_cache()
def get_logic_executor() -> LogicExecutor:
    return LogicExecutor()

# Integration Executor (Singleton)
@lru_cache()
def get_integration_executor() -> IntegrationExecutor:
    return IntegrationExecutor(client=get_http_client())


def create_block_sequencer(
    script: ScriptRepository,
    variables: VariableStore,
    step_ids: Sequence[str],
    on_block_end: BlockEndCallback,
    start_step_id: Optional[str] = None,
    **callbacks,
) -> BlockSequencer:
    """
    Builds a sequencer for one block instance with the shared executors.
    Extra keyword arguments (on_displayed_steps_changed, on_error, or
    replacement executors) are passed through.
    """
    callbacks.setdefault("logic_executor", get_logic_executor())
    callbacks.setdefault("integration_executor", get_integration_executor())
    return BlockSequencer(
        script=script,
        variables=variables,
        step_ids=step_ids,
        on_block_end=on_block_end,
        start_step_id=start_step_id,
        **callbacks,
    )
