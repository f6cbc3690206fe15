"""API tests for the signed order-created event receiver."""

import hashlib
import hmac
import json
import os

from httpx import ASGITransport, AsyncClient

from guestmenu.core.config import get_settings
from guestmenu.main import create_app
from tests.fakes import InMemoryDocumentStore, RecordingMailTransport, seed_tenant

SECRET = os.environ["ORDER_EVENT_SECRET"]


def _signed(payload: dict, secret: str = SECRET) -> tuple[bytes, dict[str, str]]:
    body = json.dumps(payload).encode()
    sig = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return body, {"X-Event-Signature-256": f"sha256={sig}", "Content-Type": "application/json"}


ORDER_EVENT = {
    "tenant_id": "host-1",
    "order_id": "o-1",
    "order": {"customerName": "Ada", "items": [{"name": "Margherita", "quantity": 1, "price": 9.5}]},
}


async def test_valid_event_sends_notification(
    client: AsyncClient,
    document_store: InMemoryDocumentStore,
    mail_transport: RecordingMailTransport,
) -> None:
    seed_tenant(document_store, "host-1")
    body, headers = _signed(ORDER_EVENT)

    response = await client.post("/api/v1/events/order-created", content=body, headers=headers)

    assert response.status_code == 202
    assert response.json() == {"accepted": True, "tenant_id": "host-1", "order_id": "o-1"}
    assert [m["to"] for m in mail_transport.sent] == ["host-1@example.com"]


async def test_send_failure_still_returns_202(
    client: AsyncClient,
    document_store: InMemoryDocumentStore,
    mail_transport: RecordingMailTransport,
) -> None:
    seed_tenant(document_store, "host-1")
    mail_transport.fail = True
    body, headers = _signed(ORDER_EVENT)

    response = await client.post("/api/v1/events/order-created", content=body, headers=headers)

    assert response.status_code == 202


async def test_missing_email_still_returns_202(
    client: AsyncClient,
    document_store: InMemoryDocumentStore,
    mail_transport: RecordingMailTransport,
) -> None:
    body, headers = _signed(ORDER_EVENT)
    response = await client.post("/api/v1/events/order-created", content=body, headers=headers)
    assert response.status_code == 202
    assert mail_transport.sent == []


async def test_wrong_signature_returns_401(
    client: AsyncClient, mail_transport: RecordingMailTransport
) -> None:
    body, headers = _signed(ORDER_EVENT, secret="wrong-secret")
    response = await client.post("/api/v1/events/order-created", content=body, headers=headers)
    assert response.status_code == 401
    assert "signature" in response.json()["message"].lower()
    assert mail_transport.sent == []


async def test_missing_signature_returns_401(client: AsyncClient) -> None:
    response = await client.post("/api/v1/events/order-created", json=ORDER_EVENT)
    assert response.status_code == 401


async def test_malformed_event_returns_400(client: AsyncClient) -> None:
    body, headers = _signed({"order_id": "o-1"})
    response = await client.post("/api/v1/events/order-created", content=body, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "invalid-argument"


async def test_secret_not_configured_returns_503(client: AsyncClient) -> None:
    prev = os.environ.pop("ORDER_EVENT_SECRET", None)
    get_settings.cache_clear()
    try:
        body, headers = _signed(ORDER_EVENT)
        response = await client.post("/api/v1/events/order-created", content=body, headers=headers)
        assert response.status_code == 503
        assert "not configured" in response.json().get("message", "").lower()
    finally:
        if prev is not None:
            os.environ["ORDER_EVENT_SECRET"] = prev
        get_settings.cache_clear()


async def test_forged_event_returns_401_while_firebase_is_down() -> None:
    """Without overrides nothing initializes Firebase; the signature is still checked first."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as bare_client:
        body, headers = _signed(ORDER_EVENT, secret="wrong-secret")
        response = await bare_client.post("/api/v1/events/order-created", content=body, headers=headers)
    assert response.status_code == 401


async def test_signed_event_returns_503_while_firebase_is_down() -> None:
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as bare_client:
        body, headers = _signed(ORDER_EVENT)
        response = await bare_client.post("/api/v1/events/order-created", content=body, headers=headers)
    assert response.status_code == 503
