from unittest.mock import MagicMock

import pytest

from bot_engine.domain.models import (
    Comparison,
    ComparisonOperator,
    ConditionOptions,
    LogicalOperator,
    LogicStepType,
    RedirectOptions,
    SetVariableOptions,
    Step,
)
from bot_engine.execution.logic import LogicExecutor


def _set_variable(expression, variable_id="var_name"):
    return Step(
        id="set",
        block_id="block_1",
        type=LogicStepType.SET_VARIABLE,
        options=SetVariableOptions(variable_id=variable_id, expression_to_evaluate=expression),
    )


def _condition(comparisons, logical_operator=LogicalOperator.AND):
    return Step(
        id="cond",
        block_id="block_1",
        type=LogicStepType.CONDITION,
        options=ConditionOptions(comparisons=comparisons, logical_operator=logical_operator),
        true_edge_id="E_true",
        false_edge_id="E_false",
    )


def _cmp(operator, value=None, variable_id="var_age"):
    return Comparison(id="c", variable_id=variable_id, operator=operator, value=value)


def test_set_variable_writes_parsed_text(variables, write_variable, written):
    step = _set_variable("Hello from {{City}}")

    edge_id = LogicExecutor().execute(step, variables, write_variable)

    assert edge_id is None
    assert written == {"var_name": "Hello from Paris"}


def test_set_variable_evaluates_math(variables, write_variable, written):
    variables.set("var_age", "20")

    LogicExecutor().execute(_set_variable("{{Age}} * 2 + 1"), variables, write_variable)

    assert written["var_name"] == "41"


def test_set_variable_keeps_invalid_math_as_text(variables, write_variable, written):
    LogicExecutor().execute(_set_variable("Jean-Pierre"), variables, write_variable)

    assert written["var_name"] == "Jean-Pierre"


def test_set_variable_without_binding_is_noop(variables, write_variable, written):
    LogicExecutor().execute(_set_variable("1 + 1", variable_id=None), variables, write_variable)
    LogicExecutor().execute(_set_variable(""), variables, write_variable)

    assert written == {}


@pytest.mark.parametrize(
    "operator, value, age, expected",
    [
        (ComparisonOperator.EQUAL, "30", "30", True),
        (ComparisonOperator.EQUAL, "30", "31", False),
        (ComparisonOperator.NOT_EQUAL, "30", "31", True),
        (ComparisonOperator.CONTAINS, "3", "30", True),
        (ComparisonOperator.GREATER, "18", "30", True),
        (ComparisonOperator.GREATER, "30", "30", True),
        (ComparisonOperator.GREATER, "40", "30", False),
        (ComparisonOperator.LESS, "40", "30", True),
        (ComparisonOperator.LESS, "abc", "30", False),
        (ComparisonOperator.IS_SET, None, "30", True),
        (ComparisonOperator.IS_SET, None, None, False),
    ],
)
def test_condition_comparisons(variables, write_variable, operator, value, age, expected):
    variables.set("var_age", age)

    edge_id = LogicExecutor().execute(_condition([_cmp(operator, value)]), variables, write_variable)

    assert edge_id == ("E_true" if expected else "E_false")


def test_condition_value_may_reference_variables(variables, write_variable):
    variables.set("var_name", "Paris")
    step = _condition([_cmp(ComparisonOperator.EQUAL, "{{City}}", variable_id="var_name")])

    assert LogicExecutor().execute(step, variables, write_variable) == "E_true"


def test_condition_and_or(variables, write_variable):
    variables.set("var_age", "30")
    comparisons = [
        _cmp(ComparisonOperator.EQUAL, "30"),
        _cmp(ComparisonOperator.EQUAL, "Lyon", variable_id="var_city"),
    ]
    executor = LogicExecutor()

    assert executor.execute(_condition(comparisons), variables, write_variable) == "E_false"
    assert (
        executor.execute(_condition(comparisons, LogicalOperator.OR), variables, write_variable)
        == "E_true"
    )


def test_condition_without_false_edge_falls_through(variables, write_variable):
    step = _condition([_cmp(ComparisonOperator.EQUAL, "99")])
    step.false_edge_id = None

    assert LogicExecutor().execute(step, variables, write_variable) is None


def test_redirect_calls_handler_with_parsed_url(variables, write_variable):
    on_redirect = MagicMock()
    step = Step(
        id="redirect",
        block_id="block_1",
        type=LogicStepType.REDIRECT,
        options=RedirectOptions(url="https://example.com/{{City}}", is_new_tab=True),
    )

    edge_id = LogicExecutor(on_redirect=on_redirect).execute(step, variables, write_variable)

    assert edge_id is None
    on_redirect.assert_called_once_with("https://example.com/Paris", True)
