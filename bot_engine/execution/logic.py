"""
Logic Executor - Synchronous Logic Step Evaluation

This module defines the LogicExecutor, a stateless class evaluating logic
steps (set variable, condition, redirect) against the variable store.
It never suspends and never raises for known step kinds: it returns an
edge id when the step branches, or None to continue with the next step.
"""

import logging
from typing import Callable, Optional

from ..domain.models import (
    Comparison,
    ComparisonOperator,
    ConditionOptions,
    LogicalOperator,
    LogicStepType,
    RedirectOptions,
    SetVariableOptions,
    Step,
)
from ..repositories.variables import VariableStore
from .variables import evaluate_expression, is_math_formula, parse_variables

logger = logging.getLogger(__name__)

WriteVariable = Callable[[str, Optional[str]], None]
RedirectHandler = Callable[[str, bool], None]


def log_redirect(url: str, is_new_tab: bool):
    logger.info(f"Redirect requested to {url} (new tab: {is_new_tab})")


class LogicExecutor:
    # The host decides what "redirect" means (open a tab, send a link, ...)
    def __init__(self, on_redirect: RedirectHandler = log_redirect):
        self.on_redirect = on_redirect

    def execute(
        self,
        step: Step,
        variables: VariableStore,
        write_variable: WriteVariable,
    ) -> Optional[str]:
        if step.type == LogicStepType.SET_VARIABLE:
            return self._execute_set_variable(step, variables, write_variable)
        if step.type == LogicStepType.CONDITION:
            return self._execute_condition(step, variables)
        if step.type == LogicStepType.REDIRECT:
            return self._execute_redirect(step, variables)

        logger.warning(f"Unsupported logic step type '{step.type}' on step {step.id}")
        return None

    def _execute_set_variable(
        self,
        step: Step,
        variables: VariableStore,
        write_variable: WriteVariable,
    ) -> Optional[str]:
        options = step.options
        if not isinstance(options, SetVariableOptions):
            return None
        if not options.variable_id or not options.expression_to_evaluate:
            return None

        expression = options.expression_to_evaluate
        value = parse_variables(expression, variables)
        if is_math_formula(expression):
            value = evaluate_expression(value)

        write_variable(options.variable_id, value)
        logger.debug(f"Step {step.id} set variable {options.variable_id}")
        return None

    def _execute_condition(self, step: Step, variables: VariableStore) -> Optional[str]:
        options = step.options
        if not isinstance(options, ConditionOptions):
            return step.false_edge_id

        results = (
            self._execute_comparison(comparison, variables)
            for comparison in options.comparisons
        )
        if options.logical_operator == LogicalOperator.OR:
            is_passed = any(results)
        else:
            is_passed = all(results)

        logger.debug(f"Condition step {step.id} evaluated to {is_passed}")
        return step.true_edge_id if is_passed else step.false_edge_id

    def _execute_comparison(self, comparison: Comparison, variables: VariableStore) -> bool:
        if not comparison.variable_id:
            return False
        input_value = variables.get(comparison.variable_id) or ""

        if comparison.operator == ComparisonOperator.IS_SET:
            return len(input_value) > 0
        if comparison.value is None:
            return False

        value = parse_variables(comparison.value, variables)
        if comparison.operator == ComparisonOperator.CONTAINS:
            return value in input_value
        if comparison.operator == ComparisonOperator.EQUAL:
            return input_value == value
        if comparison.operator == ComparisonOperator.NOT_EQUAL:
            return input_value != value
        if comparison.operator in (ComparisonOperator.GREATER, ComparisonOperator.LESS):
            left, right = _to_number(input_value), _to_number(value)
            if left is None or right is None:
                return False
            if comparison.operator == ComparisonOperator.GREATER:
                return left >= right
            return left <= right
        return False

    def _execute_redirect(self, step: Step, variables: VariableStore) -> Optional[str]:
        options = step.options
        if not isinstance(options, RedirectOptions) or not options.url:
            return None
        self.on_redirect(parse_variables(options.url, variables), options.is_new_tab)
        return None


def _to_number(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None
