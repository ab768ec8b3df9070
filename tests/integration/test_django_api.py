"""
Tests — Django HTTP Adapter
=============================
Routes, caller header, envelope and status mapping through
Django's test client.
"""

from __future__ import annotations

import json

import pytest

from adapters.django_api.wiring import build_platform, install_platform, reset_platform
from core.bootstrap import build_ticketing_platform
from core.config import TicketingConfig
from core.primitives.ledger import InMemoryValueLedger
from core.time.clock import FixedHeightClock

ADMIN = "platform-admin"
ORGANIZER = "organizer"
BUYER = "buyer"

EVENT_BODY = {
    "name": "Concert",
    "description": "Evening show",
    "venue": "Arena",
    "date": 5_000,
    "total_tickets": 1,
    "ticket_price": 50_000_000,
    "refund_window": 100,
    "category": "music",
}


@pytest.fixture
def platform():
    platform = build_ticketing_platform(
        TicketingConfig(admin_identity=ADMIN),
        clock=FixedHeightClock(1_000),
        value_ledger=InMemoryValueLedger(default_balance=10**12),
    )
    install_platform(platform)
    yield platform
    reset_platform()


def _post(client, path, body, caller=None):
    headers = {"HTTP_X_CALLER_IDENTITY": caller} if caller else {}
    return client.post(
        path, data=json.dumps(body), content_type="application/json", **headers,
    )


class TestWriteEndpoints:
    def test_create_event(self, client, platform):
        response = _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"] == {"height": 1_000, "event_id": 1}
        assert platform.get_event(1).organizer == ORGANIZER

    def test_missing_caller_header(self, client, platform):
        response = _post(client, "/v1/events/create", EVENT_BODY)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_missing_field(self, client, platform):
        body = {k: v for k, v in EVENT_BODY.items() if k != "venue"}
        response = _post(client, "/v1/events/create", body, caller=ORGANIZER)
        assert response.status_code == 400

    def test_wrong_field_type(self, client, platform):
        response = _post(
            client, "/v1/events/create", dict(EVENT_BODY, ticket_price="cheap"), caller=ORGANIZER,
        )
        assert response.status_code == 400
        assert "ticket_price" in response.json()["error"]["message"]

    def test_invalid_json(self, client, platform):
        response = client.post(
            "/v1/tickets/purchase", data="{not json", content_type="application/json",
            HTTP_X_CALLER_IDENTITY=BUYER,
        )
        assert response.status_code == 400

    def test_rejection_maps_to_409(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        _post(client, "/v1/tickets/purchase", {"event_id": 1}, caller=BUYER)

        response = _post(client, "/v1/tickets/purchase", {"event_id": 1}, caller="buyer-2")

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "SOLD_OUT"
        assert error["details"]["number"] == 3
        assert error["details"]["policy_name"] == "event_must_not_be_sold_out_policy"

    def test_not_authorized_maps_to_403(self, client, platform):
        response = _post(
            client, "/v1/admin/platform-fee", {"new_fee_percent": 9}, caller="mallory",
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_AUTHORIZED"

    def test_not_found_maps_to_404(self, client, platform):
        response = _post(client, "/v1/tickets/validate", {"ticket_id": 9}, caller=ORGANIZER)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TICKET_NOT_FOUND"

    def test_ticket_lifecycle(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        purchase = _post(client, "/v1/tickets/purchase", {"event_id": 1}, caller=BUYER)
        assert purchase.json()["data"]["ticket_id"] == 1

        refund = _post(client, "/v1/tickets/refund", {"ticket_id": 1}, caller=BUYER)
        assert refund.status_code == 200
        assert platform.get_ticket(1).is_refunded is True

    def test_admin_endpoints(self, client, platform):
        assert _post(
            client, "/v1/admin/platform-fee", {"new_fee_percent": 9}, caller=ADMIN,
        ).status_code == 200
        assert _post(
            client, "/v1/admin/min-ticket-price", {"new_min_price": 7}, caller=ADMIN,
        ).status_code == 200
        assert platform.get_fee_percent() == 9
        assert platform.get_min_price() == 7

    def test_deactivate(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        response = _post(client, "/v1/events/deactivate", {"event_id": 1}, caller=ORGANIZER)
        assert response.status_code == 200
        assert platform.get_event(1).is_active is False

    def test_get_on_write_endpoint(self, client, platform):
        response = client.get("/v1/tickets/purchase")
        assert response.status_code == 405


class TestReadEndpoints:
    def test_event_detail(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        response = client.get("/v1/events/1")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Concert"
        assert data["tickets_sold"] == 0

    def test_unknown_event(self, client, platform):
        response = client.get("/v1/events/77")
        assert response.status_code == 404
        assert response.json()["ok"] is False

    def test_ticket_and_owner(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        _post(client, "/v1/tickets/purchase", {"event_id": 1}, caller=BUYER)

        ticket = client.get("/v1/tickets/1").json()["data"]
        assert ticket["owner"] == BUYER
        assert ticket["status"] == "ACTIVE"

        owned = client.get(f"/v1/users/{BUYER}/tickets").json()["data"]
        assert owned == {"owned_tickets": [1]}
        assert client.get("/v1/users/nobody/tickets").status_code == 404

    def test_organizer(self, client, platform):
        _post(client, "/v1/events/create", EVENT_BODY, caller=ORGANIZER)
        _post(client, "/v1/tickets/purchase", {"event_id": 1}, caller=BUYER)

        data = client.get(f"/v1/organizers/{ORGANIZER}").json()["data"]
        assert data == {
            "organizer": ORGANIZER,
            "events_organized": 1,
            "total_revenue": 50_000_000,
            "events": [1],
        }

    def test_platform_fee(self, client, platform):
        data = client.get("/v1/platform-fee?amount=1000").json()["data"]
        assert data == {"amount": 1000, "fee_percent": 5, "fee": 50}

        assert client.get("/v1/platform-fee?amount=abc").status_code == 400
        policy = client.get("/v1/platform-fee").json()["data"]
        assert policy == {"fee_percent": 5, "min_ticket_price": 1_000_000}


class TestWiring:
    def test_platform_built_from_settings(self, settings):
        reset_platform()
        settings.TICKETING = {"ADMIN_IDENTITY": "settings-admin", "PLATFORM_FEE_PERCENT": "12"}
        try:
            platform = build_platform()
            assert platform.config.admin_identity == "settings-admin"
            assert platform.get_fee_percent() == 12
            assert build_platform() is platform
        finally:
            reset_platform()
