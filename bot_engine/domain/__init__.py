"""
Domain Layer - Static Script Models

Defines the core domain model representing the static structure of a
conversational script: Blocks, Steps, Edges and Choice Items.
"""

from bot_engine.domain.models import (
    Block,
    BubbleStepType,
    ChoiceInputOptions,
    ChoiceItem,
    Comparison,
    ComparisonOperator,
    ConditionOptions,
    Edge,
    InputOptions,
    InputStepType,
    IntegrationStepType,
    KeyValue,
    LogicalOperator,
    LogicStepType,
    RedirectOptions,
    ResponseVariableMapping,
    Script,
    SetVariableOptions,
    Source,
    Step,
    StepType,
    Target,
    Variable,
    Webhook,
    WebhookOptions,
    is_bubble_step,
    is_choice_input,
    is_input_step,
    is_integration_step,
    is_logic_step,
    is_single_choice_input,
)

__all__ = [
    "Block",
    "BubbleStepType",
    "ChoiceInputOptions",
    "ChoiceItem",
    "Comparison",
    "ComparisonOperator",
    "ConditionOptions",
    "Edge",
    "InputOptions",
    "InputStepType",
    "IntegrationStepType",
    "KeyValue",
    "LogicalOperator",
    "LogicStepType",
    "RedirectOptions",
    "ResponseVariableMapping",
    "Script",
    "SetVariableOptions",
    "Source",
    "Step",
    "StepType",
    "Target",
    "Variable",
    "Webhook",
    "WebhookOptions",
    "is_bubble_step",
    "is_choice_input",
    "is_input_step",
    "is_integration_step",
    "is_logic_step",
    "is_single_choice_input",
]
