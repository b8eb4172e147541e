"""Tests for the retry policy and settled batches."""
import httpx
import pytest

from finnolan.domain.exceptions import ProviderError
from finnolan.domain.results import Failed, Ok
from finnolan.infrastructure.http import RetryPolicy, error_message, gather_settled


def scripted_client(statuses):
    """AsyncClient whose responses follow ``statuses``; an exception entry is raised."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        step = statuses[min(len(calls), len(statuses) - 1)]
        calls.append(request)
        if isinstance(step, Exception):
            raise step
        return httpx.Response(step, json={"attempt": len(calls)})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), calls


@pytest.mark.asyncio
async def test_default_policy_makes_one_attempt():
    client, calls = scripted_client([503, 200])
    async with client:
        response = await RetryPolicy().send(client, "test", "GET", "https://provider.test/x")

    assert response.status_code == 503
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_retries_retryable_status_until_success():
    client, calls = scripted_client([503, 429, 200])
    async with client:
        response = await RetryPolicy(attempts=3, backoff=0).send(
            client, "test", "GET", "https://provider.test/x"
        )

    assert response.status_code == 200
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    client, calls = scripted_client([400, 200])
    async with client:
        response = await RetryPolicy(attempts=3, backoff=0).send(
            client, "test", "GET", "https://provider.test/x"
        )

    assert response.status_code == 400
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_transport_error_becomes_provider_error():
    client, calls = scripted_client([httpx.ConnectError("connection refused")])
    async with client:
        with pytest.raises(ProviderError) as exc_info:
            await RetryPolicy(attempts=2, backoff=0).send(
                client, "test", "GET", "https://provider.test/x"
            )

    assert len(calls) == 2
    assert exc_info.value.provider == "test"


@pytest.mark.asyncio
async def test_transport_error_then_success():
    client, calls = scripted_client([httpx.ReadTimeout("slow"), 200])
    async with client:
        response = await RetryPolicy(attempts=2, backoff=0).send(
            client, "test", "GET", "https://provider.test/x"
        )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_gather_settled_keeps_input_order():
    async def ok(value):
        return value

    async def fail():
        raise ValueError("bad symbol")

    outcomes = await gather_settled([ok(1), fail(), ok(3)])

    assert outcomes == [Ok(1), Failed("bad symbol"), Ok(3)]


def test_error_message_reads_nested_error():
    response = httpx.Response(400, json={"error": {"message": "Invalid voice"}})
    assert error_message(response, "default") == "Invalid voice"


def test_error_message_reads_flat_message():
    response = httpx.Response(422, json={"message": "Invalid `to` field"})
    assert error_message(response, "default") == "Invalid `to` field"


def test_error_message_defaults_on_non_json():
    response = httpx.Response(502, text="<html>Bad gateway</html>")
    assert error_message(response, "default") == "default"
