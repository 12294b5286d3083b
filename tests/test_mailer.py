"""Tests for the HTTP mail API client."""

import json

import httpx
import pytest

from app.domain.schemas.notification import EmailMessage
from app.infrastructure.mailer import EmailClient, MailDeliveryError

MESSAGE = EmailMessage(recipient="a@x.com", subject="Reset", body="link")


async def test_posts_message():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, json={"id": "msg-1"})

    client = EmailClient(base_url="https://mail.example.com/", api_key="k", sender="noreply@x.com",
                         transport=httpx.MockTransport(handler))
    await client.send(MESSAGE)

    assert len(seen) == 1
    assert str(seen[0].url) == "https://mail.example.com/send"
    assert seen[0].headers["Authorization"] == "Bearer k"
    assert json.loads(seen[0].content) == {
        "from": "noreply@x.com",
        "to": "a@x.com",
        "subject": "Reset",
        "text": "link",
    }


async def test_rejected_message_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = EmailClient(base_url="https://mail.example.com", api_key="k", transport=transport)

    with pytest.raises(MailDeliveryError):
        await client.send(MESSAGE)


async def test_unreachable_api_raises():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = EmailClient(base_url="https://mail.example.com", api_key="k", transport=httpx.MockTransport(handler))
    with pytest.raises(MailDeliveryError):
        await client.send(MESSAGE)


async def test_unconfigured_client_raises():
    client = EmailClient(base_url="", api_key="")
    with pytest.raises(MailDeliveryError):
        await client.send(MESSAGE)
