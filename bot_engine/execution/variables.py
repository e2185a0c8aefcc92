"""
Variable templating for step options.

Steps reference variables by display name with {{Variable name}} placeholders.
Set-variable expressions that look like math formulas are evaluated with a
sandboxed Jinja2 expression compiler; anything that does not evaluate to a
number is kept as plain text.
"""

import logging
import re
from functools import lru_cache
from typing import Optional

from jinja2 import StrictUndefined, TemplateError
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment

from ..repositories.variables import VariableStore

logger = logging.getLogger(__name__)

VARIABLE_PLACEHOLDER = re.compile(r"\{\{([^{}]+)\}\}")
MATH_OPERATORS = ("+", "-", "*", "/")


class ArithmeticEnvironment(SandboxedEnvironment):
    """
    Sandbox limited to arithmetic on numbers.

    Every operator is intercepted and refuses non-numeric operands, the power
    operator is refused outright, and calls, globals, filters and tests are
    unavailable.
    """

    intercepted_binops = frozenset(["+", "-", "*", "/", "//", "%", "**"])
    intercepted_unops = frozenset(["+", "-"])

    def __init__(self, **options):
        super().__init__(**options)
        self.globals = {}
        self.filters = {}
        self.tests = {}

    def call_binop(self, context, operator, left, right):
        if operator == "**":
            raise SecurityError("the power operator is not allowed")
        _require_numbers(left, right)
        return super().call_binop(context, operator, left, right)

    def call_unop(self, context, operator, arg):
        _require_numbers(arg)
        return super().call_unop(context, operator, arg)

    def call(self, context, obj, *args, **kwargs):
        raise SecurityError("calls are not allowed")


def _require_numbers(*operands):
    for operand in operands:
        if isinstance(operand, bool) or not isinstance(operand, (int, float)):
            raise SecurityError("only numbers are allowed in expressions")


@lru_cache(maxsize=1)
def _get_environment() -> ArithmeticEnvironment:
    """Create and cache the expression environment."""
    return ArithmeticEnvironment(undefined=StrictUndefined)


def parse_variables(text: Optional[str], variables: VariableStore) -> str:
    """
    Replace every {{name}} placeholder with the variable value.

    Unknown variables and unset values render as an empty string.
    """
    if not text:
        return ""

    def _replace(match: re.Match) -> str:
        variable = variables.find_by_name(match.group(1).strip())
        if variable is None or variable.value is None:
            return ""
        return variable.value

    return VARIABLE_PLACEHOLDER.sub(_replace, text)


def is_math_formula(expression: str) -> bool:
    return any(operator in expression for operator in MATH_OPERATORS)


def evaluate_expression(expression: str) -> str:
    """
    Evaluate an arithmetic expression such as "3 * (2 + 1)".

    Returns the number as text ("9", "2.5"), or the expression unchanged when
    it is not valid arithmetic on numbers.
    """
    try:
        result = _get_environment().compile_expression(
            expression, undefined_to_none=False
        )()
        if isinstance(result, bool) or not isinstance(result, (int, float)):
            return expression
        if isinstance(result, float) and result.is_integer():
            return str(int(result))
        return str(result)
    except (TemplateError, ArithmeticError, TypeError, ValueError) as e:
        logger.debug(f"Kept '{expression}' as text: {e}")
        return expression
