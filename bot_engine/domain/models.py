"""
Domain Layer - Static Script Models

This module defines the static structure of a conversational script (the
"bot"): Blocks, Steps, Edges and Choice Items. These dataclasses are loaded by
the host application and are read-only for the engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Union


class BubbleStepType(str, Enum):
    TEXT = "text"


class InputStepType(str, Enum):
    TEXT = "text input"
    NUMBER = "number input"
    EMAIL = "email input"
    URL = "url input"
    DATE = "date input"
    PHONE = "phone number input"
    CHOICE = "choice input"


class LogicStepType(str, Enum):
    SET_VARIABLE = "Set variable"
    CONDITION = "Condition"
    REDIRECT = "Redirect"


class IntegrationStepType(str, Enum):
    GOOGLE_SHEETS = "Google Sheets"
    GOOGLE_ANALYTICS = "Google Analytics"
    WEBHOOK = "Webhook"


"""
StepType classifies step behavior:
- bubble: Content shown to the user, advanced once displayed
- input: Prompts the user and waits for an answer
- logic: Evaluated synchronously against the variables
- integration: Performs an external call before moving on
"""
StepType = Union[BubbleStepType, InputStepType, LogicStepType, IntegrationStepType]


class ComparisonOperator(str, Enum):
    EQUAL = "Equal to"
    NOT_EQUAL = "Not equal"
    CONTAINS = "Contains"
    GREATER = "Greater than"
    LESS = "Less than"
    IS_SET = "Is set"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


@dataclass
class Variable:
    """
    A named slot in the script.

    Attributes:
        id: Identifier referenced by steps (variable_id).
        name: Human-readable name, used in {{name}} placeholders.
        value: Current value. None means "not set".
    """
    id: str
    name: str
    value: Optional[str] = None


@dataclass
class InputOptions:
    variable_id: Optional[str] = None


@dataclass
class ChoiceInputOptions(InputOptions):
    """
    Options of a choice input.

    Attributes:
        item_ids: Ordered ChoiceItem ids rendered as buttons.
        is_multiple_choice: When False, the answer selects exactly one item
            and the item decides where the conversation goes.
        button_label: Label of the submit button (multiple choice only).
    """
    item_ids: List[str] = field(default_factory=list)
    is_multiple_choice: bool = False
    button_label: str = "Send"


@dataclass
class SetVariableOptions:
    variable_id: Optional[str] = None
    expression_to_evaluate: Optional[str] = None


@dataclass
class Comparison:
    id: str
    variable_id: Optional[str] = None
    operator: Optional[ComparisonOperator] = None
    value: Optional[str] = None


@dataclass
class ConditionOptions:
    comparisons: List[Comparison] = field(default_factory=list)
    logical_operator: LogicalOperator = LogicalOperator.AND


@dataclass
class RedirectOptions:
    url: Optional[str] = None
    is_new_tab: bool = False


@dataclass
class KeyValue:
    id: str
    key: Optional[str] = None
    value: Optional[str] = None


@dataclass
class Webhook:
    """
    Outgoing HTTP request description. Every text field may contain
    {{Variable name}} placeholders.
    """
    url: Optional[str] = None
    method: HttpMethod = "GET"
    headers: List[KeyValue] = field(default_factory=list)
    query_params: List[KeyValue] = field(default_factory=list)
    body: Optional[str] = None


@dataclass
class ResponseVariableMapping:
    """
    Copies a value out of the webhook response into a variable.

    Attributes:
        body_path: Dotted path into the response, e.g. "data.user.name" or
            "data.items[0].id". The root object is {"statusCode", "data"}.
        variable_id: Variable receiving the value.
    """
    id: str
    body_path: Optional[str] = None
    variable_id: Optional[str] = None


@dataclass
class WebhookOptions:
    webhook: Webhook = field(default_factory=Webhook)
    response_variable_mapping: List[ResponseVariableMapping] = field(default_factory=list)


StepOptions = Union[
    InputOptions,
    ChoiceInputOptions,
    SetVariableOptions,
    ConditionOptions,
    RedirectOptions,
    WebhookOptions,
]


@dataclass
class Step:
    """
    Fundamental unit of a conversational script.

    Attributes:
        id: Unique identifier within the script.
        block_id: Block owning this step.
        type: StepType discriminant.
        content: Text of a bubble step.
        options: Kind-specific options (see StepOptions).
        edge_id: Direct outgoing edge. When set, the block ends after this step.
        true_edge_id: Condition steps only - edge taken when the condition passes.
        false_edge_id: Condition steps only - edge taken otherwise.
    """
    id: str
    block_id: str
    type: StepType
    content: Optional[str] = None
    options: Optional[StepOptions] = None
    edge_id: Optional[str] = None
    true_edge_id: Optional[str] = None
    false_edge_id: Optional[str] = None


@dataclass
class ChoiceItem:
    """
    A button of a choice input, and where it leads.

    Attributes:
        id: Unique identifier.
        step_id: Choice input step owning the item.
        content: Label shown to the user; also the answer content sent back.
        edge_id: Edge followed when selected. Falls back to the step edge.
    """
    id: str
    step_id: str
    content: str
    edge_id: Optional[str] = None


@dataclass
class Source:
    block_id: str
    step_id: Optional[str] = None
    node_id: Optional[str] = None


@dataclass
class Target:
    block_id: str
    step_id: Optional[str] = None


@dataclass
class Edge:
    id: str
    from_: Source
    to: Target


@dataclass
class Block:
    """
    Ordered run of steps presented together.

    Attributes:
        id: Unique identifier (edge targets point here).
        title: Human-readable title.
        step_ids: Ordered step ids.
    """
    id: str
    title: str
    step_ids: List[str] = field(default_factory=list)


@dataclass
class Script:
    """
    The whole conversational script graph.

    Top-level organizational unit. Blocks, steps, edges and choice items are
    indexed by id for O(1) lookup.
    """
    id: str
    name: str
    blocks: Dict[str, Block] = field(default_factory=dict)
    steps: Dict[str, Step] = field(default_factory=dict)
    edges: Dict[str, Edge] = field(default_factory=dict)
    choice_items: Dict[str, ChoiceItem] = field(default_factory=dict)
    variables: List[Variable] = field(default_factory=list)


def is_bubble_step(step: Step) -> bool:
    return isinstance(step.type, BubbleStepType)


def is_input_step(step: Step) -> bool:
    return isinstance(step.type, InputStepType)


def is_choice_input(step: Step) -> bool:
    return step.type == InputStepType.CHOICE


def is_logic_step(step: Step) -> bool:
    return isinstance(step.type, LogicStepType)


def is_integration_step(step: Step) -> bool:
    return isinstance(step.type, IntegrationStepType)


def is_single_choice_input(step: Step) -> bool:
    if not is_choice_input(step):
        return False
    options = step.options
    return not (isinstance(options, ChoiceInputOptions) and options.is_multiple_choice)
