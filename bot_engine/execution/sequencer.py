"""
Sequencer - Block State Machine

The BlockSequencer is the deterministic state machine that walks the ordered
steps of one block, delegates logic and integration steps to their executors,
and decides when the block ends and through which edge.
-----------------------------------------------

The sequencer is cooperative. It only suspends in two places:
1. While awaiting an integration step (PROCESSING).
2. While a bubble or input step waits for the host to call advance()
    (WAITING_FOR_ANSWER).

Between those points it keeps "momentum": logic steps and finished
integrations flow straight into the next step of the block. Everything for
step N (variable writes, branching) is applied before step N+1 is displayed.

A block ends exactly once, through on_block_end(edge_id). An edge id of None
means "no explicit edge", and the host picks the structural default.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..domain.models import (
    InputOptions,
    Step,
    is_bubble_step,
    is_input_step,
    is_integration_step,
    is_logic_step,
    is_single_choice_input,
)
from ..repositories.script import ScriptRepository
from ..repositories.variables import VariableStore
from ..state.models import BlockSnapshot, BlockStatus
from .choice import get_single_choice_edge_id
from .exceptions import BlockStateError, IntegrationError
from .integration import IntegrationExecutor
from .logic import LogicExecutor
from .schemas.state_machine import StepTransition

logger = logging.getLogger(__name__)

BlockEndCallback = Callable[[Optional[str]], None]
DisplayedStepsCallback = Callable[[List[Step]], None]
ErrorCallback = Callable[[Step, Exception], None]


class BlockSequencer:
    """
    Drives one block instance. When entered through start_step_id, the block
    continues from that step's position in step_ids rather than from index 1.
    """

    def __init__(
        self,
        script: ScriptRepository,
        variables: VariableStore,
        step_ids: Sequence[str],
        on_block_end: BlockEndCallback,
        start_step_id: Optional[str] = None,
        *,
        logic_executor: Optional[LogicExecutor] = None,
        integration_executor: Optional[IntegrationExecutor] = None,
        on_displayed_steps_changed: Optional[DisplayedStepsCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.script = script
        self.variables = variables
        self.step_ids = list(step_ids)
        self.start_step_id = start_step_id
        self.on_block_end = on_block_end
        self.logic_executor = logic_executor or LogicExecutor()
        self.integration_executor = integration_executor
        self.on_displayed_steps_changed = on_displayed_steps_changed
        self.on_error = on_error

        self._displayed_steps: List[Step] = []
        self._status = BlockStatus.IDLE
        # Bumped by cancel(); results tagged with an older value are dropped
        self._generation = 0
        # Position of the entry step inside step_ids
        self._offset = 0
        self._end_edge_id: Optional[str] = None
        self._stalled_step_id: Optional[str] = None
        self._error: Optional[str] = None

    # ==========================================================================
    # Public API
    # ==========================================================================

    @property
    def status(self) -> BlockStatus:
        return self._status

    @property
    def displayed_steps(self) -> Tuple[Step, ...]:
        return tuple(self._displayed_steps)

    @property
    def current_step(self) -> Optional[Step]:
        if not self._displayed_steps:
            return None
        return self._displayed_steps[-1]

    @property
    def renderable_steps(self) -> List[Step]:
        """Displayed steps the render collaborator shows (bubbles and inputs)."""
        return [
            step
            for step in self._displayed_steps
            if is_bubble_step(step) or is_input_step(step)
        ]

    async def start(self) -> BlockStatus:
        """
        Display the entry step and run until the block needs an answer or ends.
        """
        if self._status is not BlockStatus.IDLE:
            raise BlockStateError(f"Block already started (status {self._status.value}).")

        first_step_id = self.start_step_id or next(iter(self.step_ids), None)
        if self.start_step_id in self.step_ids:
            self._offset = self.step_ids.index(self.start_step_id)

        logger.info(f"Starting block at step {first_step_id}")
        first_step = self.script.get_step(first_step_id)
        if first_step is None:
            self._stall(first_step_id)
            return self._status

        await self._run(first_step)
        return self._status

    async def advance(self, answer_content: Optional[str] = None) -> BlockStatus:
        """
        Conclude the current step with the user's answer (if any) and move on.

        Answers arriving while the block is not waiting for one (still
        processing, or already finished) are ignored.
        """
        if self._status is not BlockStatus.WAITING_FOR_ANSWER:
            logger.warning(f"Ignoring answer while block is {self._status.value}")
            return self._status

        transition, next_step = self._conclude_step(self.current_step, answer_content)
        if transition == StepTransition.ADVANCE:
            await self._run(next_step)
        return self._status

    def cancel(self):
        """
        Tear the block down. A pending integration may still finish, but its
        variable writes and its result are discarded.
        """
        self._generation += 1
        if not self._status.is_terminal:
            logger.info(f"Block cancelled while {self._status.value}")
            self._status = BlockStatus.CANCELLED

    def snapshot(self) -> BlockSnapshot:
        current = self.current_step
        return BlockSnapshot(
            status=self._status,
            step_ids=self.step_ids,
            displayed_step_ids=[step.id for step in self._displayed_steps],
            current_step_id=current.id if current else None,
            end_edge_id=self._end_edge_id,
            stalled_step_id=self._stalled_step_id,
            error=self._error,
        )

    # ==========================================================================
    # Dispatch Loop
    # ==========================================================================

    async def _run(self, step: Optional[Step]):
        """
        Momentum loop: keep displaying steps while each one concludes by itself.
        """
        generation = self._generation
        while step is not None:
            self._display(step)
            if generation != self._generation:
                return
            step = await self._enter_step(step, generation)

    async def _enter_step(self, step: Step, generation: int) -> Optional[Step]:
        """
        Dispatch a freshly displayed step.
        Returns the next step to display, or None when the loop must yield.
        """
        if is_logic_step(step):
            self._status = BlockStatus.PROCESSING
            try:
                edge_id = self.logic_executor.execute(
                    step, self.variables, self._make_writer(generation)
                )
            except Exception as e:
                self._fail(step, e)
                if self.on_error is None:
                    raise
                self.on_error(step, e)
                return None
            return self._after_execution(step, edge_id)

        if is_integration_step(step):
            self._status = BlockStatus.PROCESSING
            try:
                edge_id = await self._execute_integration(step, generation)
            except Exception as e:
                if generation != self._generation:
                    logger.info(f"Dropping failure of step {step.id}: block was cancelled")
                    return None
                self._fail(step, e)
                if self.on_error is None:
                    raise
                self.on_error(step, e)
                return None

            if generation != self._generation:
                logger.info(f"Dropping late result of step {step.id}: block was cancelled")
                return None
            return self._after_execution(step, edge_id)

        # Bubbles and inputs wait for the host
        self._status = BlockStatus.WAITING_FOR_ANSWER
        return None

    async def _execute_integration(self, step: Step, generation: int) -> Optional[str]:
        if self.integration_executor is None:
            raise IntegrationError(step.id, "no integration executor configured")
        return await self.integration_executor.execute(
            step, self.variables, self._make_writer(generation)
        )

    def _after_execution(self, step: Step, edge_id: Optional[str]) -> Optional[Step]:
        if edge_id:
            self._complete(edge_id)
            return None
        _, next_step = self._conclude_step(step, None)
        return next_step

    # ==========================================================================
    # Branching Decision (The Core Logic)
    # ==========================================================================

    def _conclude_step(
        self, step: Step, answer_content: Optional[str]
    ) -> Tuple[StepTransition, Optional[Step]]:
        """
        Decides what follows the current step: end the block, or the next step.
        """
        # 1. Store the answer before any branching decision
        if is_input_step(step) and answer_content:
            options = step.options
            if isinstance(options, InputOptions) and options.variable_id:
                self.variables.set(options.variable_id, answer_content)

        # 2. A single choice always ends the block
        if is_single_choice_input(step):
            edge_id = get_single_choice_edge_id(
                step, self.script.get_choice_items(), answer_content
            )
            self._complete(edge_id)
            return StepTransition.EXIT, None

        # 3. Own edge, or nothing left in the block
        if step.edge_id or self._is_at_last_step():
            self._complete(step.edge_id)
            return StepTransition.EXIT, None

        # 4. Next step of the block
        next_step_id = self.step_ids[self._offset + len(self._displayed_steps)]
        next_step = self.script.get_step(next_step_id)
        if next_step is None:
            self._stall(next_step_id)
            return StepTransition.STALL, None
        return StepTransition.ADVANCE, next_step

    def _is_at_last_step(self) -> bool:
        return self._offset + len(self._displayed_steps) >= len(self.step_ids)

    # ==========================================================================
    # State Mutation Helpers
    # ==========================================================================

    def _display(self, step: Step):
        self._displayed_steps.append(step)
        if self.on_displayed_steps_changed and (is_bubble_step(step) or is_input_step(step)):
            self.on_displayed_steps_changed(self.renderable_steps)

    def _make_writer(self, generation: int) -> Callable[[str, Optional[str]], None]:
        def write_variable(variable_id: str, value: Optional[str]):
            if generation != self._generation:
                logger.info(f"Dropping write to {variable_id}: block was cancelled")
                return
            self.variables.set(variable_id, value)

        return write_variable

    def _complete(self, edge_id: Optional[str]):
        if self._status is BlockStatus.COMPLETED:
            return
        self._status = BlockStatus.COMPLETED
        self._end_edge_id = edge_id
        logger.info(f"Block ended through edge {edge_id}")
        self.on_block_end(edge_id)

    def _stall(self, step_id: Optional[str]):
        self._status = BlockStatus.STALLED
        self._stalled_step_id = step_id
        logger.warning(f"Block stalled: step '{step_id}' not found")

    def _fail(self, step: Step, error: Exception):
        self._status = BlockStatus.FAILED
        self._error = str(error)
        logger.error(f"Step {step.id} failed: {error}")
