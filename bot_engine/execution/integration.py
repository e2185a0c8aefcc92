"""
Integration Executor - Asynchronous External Calls

This module defines the IntegrationExecutor, which performs the external
action of an integration step and copies results into the variable store.
Only webhooks are executed by the engine itself; integrations needing host
credentials (Google Sheets, Google Analytics) are left to the host and
treated as fall-through.

Failures are never swallowed: they surface as IntegrationError so the
sequencer can stop the block instead of advancing with partial data.
"""

import json
import logging
import re
from typing import Any, Callable, List, Optional

import httpx

from ..config import settings
from ..domain.models import (
    IntegrationStepType,
    KeyValue,
    Step,
    WebhookOptions,
)
from ..repositories.variables import VariableStore
from .exceptions import IntegrationError
from .schemas.webhook import WebhookRequest, WebhookResponse
from .variables import parse_variables

logger = logging.getLogger(__name__)

WriteVariable = Callable[[str, Optional[str]], None]

PATH_TOKEN = re.compile(r"[^.\[\]]+|\[(\d+)\]")


class IntegrationExecutor:
    # 1. DEPENDENCY INJECTION: the HTTP client is shared and owned by the host
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def execute(
        self,
        step: Step,
        variables: VariableStore,
        write_variable: WriteVariable,
    ) -> Optional[str]:
        if step.type == IntegrationStepType.WEBHOOK:
            return await self._execute_webhook(step, variables, write_variable)

        logger.warning(
            f"Integration '{step.type}' on step {step.id} is handled by the host; skipping"
        )
        return None

    async def _execute_webhook(
        self,
        step: Step,
        variables: VariableStore,
        write_variable: WriteVariable,
    ) -> Optional[str]:
        options = step.options
        if not isinstance(options, WebhookOptions) or not options.webhook.url:
            raise IntegrationError(step.id, "webhook URL is not configured")

        # 1. Build the request with placeholders substituted
        request = self._build_request(options, variables)

        # 2. Send it
        response = await self._send(step, request)

        # 3. Map the response into variables
        root = response.as_root()
        for mapping in options.response_variable_mapping:
            if not mapping.body_path or not mapping.variable_id:
                continue
            value = get_value_at_path(root, parse_variables(mapping.body_path, variables))
            write_variable(mapping.variable_id, _to_variable_value(value))

        return None

    def _build_request(self, options: WebhookOptions, variables: VariableStore) -> WebhookRequest:
        webhook = options.webhook
        return WebhookRequest(
            url=parse_variables(webhook.url, variables),
            method=webhook.method,
            headers=_parse_key_values(webhook.headers, variables),
            query_params=_parse_key_values(webhook.query_params, variables),
            body=parse_variables(webhook.body, variables) or None,
        )

    async def _send(self, step: Step, request: WebhookRequest) -> WebhookResponse:
        headers = {"User-Agent": settings.WEBHOOK_USER_AGENT, **request.headers}
        content = request.body.encode("utf-8") if request.body else None
        if content and not any(key.lower() == "content-type" for key in headers):
            headers["Content-Type"] = (
                "application/json" if _is_json(request.body) else "text/plain"
            )

        try:
            response = await self.client.request(
                request.method,
                request.url,
                params=request.query_params or None,
                headers=headers,
                content=content,
                timeout=settings.WEBHOOK_TIMEOUT,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            logger.error(f"Webhook call for step {step.id} failed: {e}")
            raise IntegrationError(step.id, str(e)) from e

        if response.status_code >= 400:
            logger.error(
                f"Webhook for step {step.id} answered {response.status_code}: "
                f"{response.text[:settings.WEBHOOK_MAX_RESPONSE_LOG_CHARS]}"
            )
            raise IntegrationError(step.id, f"HTTP {response.status_code}")

        logger.debug(f"Webhook for step {step.id} answered {response.status_code}")
        return WebhookResponse(status_code=response.status_code, data=_read_body(response))


def get_value_at_path(root: Any, path: str) -> Any:
    """
    Read a dotted/indexed path such as "data.items[0].name" from nested JSON.
    Returns None when any segment is missing.
    """
    current = root
    for match in PATH_TOKEN.finditer(path.strip()):
        index, key = match.group(1), match.group(0)
        if index is not None:
            if not isinstance(current, list) or int(index) >= len(current):
                return None
            current = current[int(index)]
        elif isinstance(current, dict):
            if key not in current:
                return None
            current = current[key]
        elif isinstance(current, list) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        else:
            return None
    return current


def _parse_key_values(items: List[KeyValue], variables: VariableStore) -> dict:
    return {
        parse_variables(item.key, variables): parse_variables(item.value, variables)
        for item in items
        if item.key
    }


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def _read_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _to_variable_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)
