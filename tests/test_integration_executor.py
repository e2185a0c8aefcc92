import json

import httpx
import pytest

from bot_engine.domain.models import (
    IntegrationStepType,
    KeyValue,
    ResponseVariableMapping,
    Step,
    Webhook,
    WebhookOptions,
)
from bot_engine.execution.exceptions import IntegrationError
from bot_engine.execution.integration import IntegrationExecutor, get_value_at_path


def _webhook_step(webhook, mappings=()):
    return Step(
        id="hook",
        block_id="block_1",
        type=IntegrationStepType.WEBHOOK,
        options=WebhookOptions(webhook=webhook, response_variable_mapping=list(mappings)),
    )


@pytest.mark.asyncio
async def test_webhook_sends_parsed_request_and_maps_response(variables, write_variable, written):
    variables.set("var_name", "Alice")
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["token"] = request.headers.get("X-Token")
        captured["content_type"] = request.headers.get("Content-Type")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"user": {"id": 7, "tags": ["vip", "new"]}})

    step = _webhook_step(
        Webhook(
            url="https://api.example.com/users/{{Name}}",
            method="POST",
            headers=[KeyValue(id="h1", key="X-Token", value="secret")],
            query_params=[KeyValue(id="q1", key="city", value="{{City}}")],
            body='{"name": "{{Name}}"}',
        ),
        [
            ResponseVariableMapping(id="m1", body_path="data.user.id", variable_id="var_age"),
            ResponseVariableMapping(id="m2", body_path="data.user.tags[1]", variable_id="var_city"),
            ResponseVariableMapping(id="m3", body_path="statusCode", variable_id="var_name"),
        ],
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        edge_id = await IntegrationExecutor(client).execute(step, variables, write_variable)

    assert edge_id is None
    assert captured["method"] == "POST"
    assert captured["url"] == "https://api.example.com/users/Alice?city=Paris"
    assert captured["token"] == "secret"
    assert captured["content_type"] == "application/json"
    assert captured["body"] == {"name": "Alice"}
    assert written == {"var_age": "7", "var_city": "new", "var_name": "200"}


@pytest.mark.asyncio
async def test_webhook_http_error_raises(variables, write_variable, written):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream down")

    step = _webhook_step(
        Webhook(url="https://api.example.com/fail"),
        [ResponseVariableMapping(id="m1", body_path="data", variable_id="var_name")],
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(IntegrationError) as exc_info:
            await IntegrationExecutor(client).execute(step, variables, write_variable)

    assert exc_info.value.step_id == "hook"
    assert written == {}


@pytest.mark.asyncio
async def test_webhook_transport_error_raises(variables, write_variable):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    step = _webhook_step(Webhook(url="https://api.example.com/down"))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(IntegrationError):
            await IntegrationExecutor(client).execute(step, variables, write_variable)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "webhook",
    [
        Webhook(
            url="https://api.example.com/users",
            headers=[KeyValue(id="h1", key="X-Name", value="{{Name}}")],
        ),
        Webhook(url="http://[::1/{{Name}}"),
    ],
    ids=["non_ascii_header", "malformed_url"],
)
async def test_webhook_request_that_cannot_be_built_raises(variables, write_variable, webhook):
    variables.set("var_name", "Zoë")

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request should not be sent")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(IntegrationError) as exc_info:
            await IntegrationExecutor(client).execute(
                _webhook_step(webhook), variables, write_variable
            )

    assert exc_info.value.step_id == "hook"


@pytest.mark.asyncio
async def test_webhook_without_url_raises(variables, write_variable):
    async with httpx.AsyncClient() as client:
        with pytest.raises(IntegrationError):
            await IntegrationExecutor(client).execute(
                _webhook_step(Webhook()), variables, write_variable
            )


@pytest.mark.asyncio
async def test_host_integrations_fall_through(variables, write_variable, written):
    step = Step(id="sheet", block_id="block_1", type=IntegrationStepType.GOOGLE_SHEETS)

    async with httpx.AsyncClient() as client:
        edge_id = await IntegrationExecutor(client).execute(step, variables, write_variable)

    assert edge_id is None
    assert written == {}


def test_get_value_at_path():
    root = {"statusCode": 200, "data": {"items": [{"id": "a"}, {"id": "b"}]}}

    assert get_value_at_path(root, "data.items[1].id") == "b"
    assert get_value_at_path(root, "data.items.0.id") == "a"
    assert get_value_at_path(root, "data.items[5].id") is None
    assert get_value_at_path(root, "data.missing") is None
    assert get_value_at_path(root, "statusCode") == 200
