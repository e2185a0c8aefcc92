from bot_engine.execution.schemas.state_machine import BlockStatus, StepTransition
from bot_engine.execution.schemas.webhook import WebhookRequest, WebhookResponse

__all__ = [
    "BlockStatus",
    "StepTransition",
    "WebhookRequest",
    "WebhookResponse",
]
