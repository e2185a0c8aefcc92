"""
Webhook Schemas - Structured Models for Outgoing Calls

Pydantic models describing a prepared webhook request (placeholders already
substituted) and the normalized response the variable mappings read from.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class WebhookRequest(BaseModel):
    url: str
    method: str = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    query_params: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


class WebhookResponse(BaseModel):
    """
    Response root used by ResponseVariableMapping.body_path.
    Serialized with aliases so paths read like "data.user.name".
    """
    status_code: int = Field(..., alias="statusCode")
    data: Any = None

    model_config = ConfigDict(populate_by_name=True)

    def as_root(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
