"""Unit tests for the network checks routes."""

import json

import pytest
from prose_pod_service.repositories import MemoryPodConfigRepository

from prose_pod_api.dependencies import get_pod_config_repository
from prose_pod_api.main import app

SSE_HEADERS = {"Accept": "text/event-stream"}


def parse_sse(body):
    """Split an SSE body into a list of {field: value} dicts (comments under the empty field)."""
    events = []
    for block in body.strip().split("\n\n"):
        event = {}
        for line in block.splitlines():
            field, _, value = line.partition(": ")
            event[field] = value
        events.append(event)
    return events


class TestAccessControl:

    def test_requires_token(self, client):
        response = client.get("/v1/network/checks")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"] == "unauthorized"

    def test_rejects_invalid_token(self, client):
        response = client.get("/v1/network/checks", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_rejects_expired_token(self, client, token_factory):
        headers = {"Authorization": f"Bearer {token_factory(expires_in=-60)}"}
        response = client.get("/v1/network/checks", headers=headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_requires_admin(self, client, member_headers):
        response = client.get("/v1/network/checks/dns", headers=member_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"


class TestPreconditions:

    def test_pod_address_not_initialized(self, client, admin_headers):
        app.dependency_overrides[get_pod_config_repository] = lambda: MemoryPodConfigRepository(
            server_domain="example.org"
        )

        response = client.get("/v1/network/checks", headers=admin_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "pod_address_not_initialized"
        assert data["details"]["recovery_suggestions"] == ["Call `PUT /v1/pod/config/address` to initialize it."]
        assert data["request_id"]

    def test_server_config_not_initialized(self, client, admin_headers):
        app.dependency_overrides[get_pod_config_repository] = lambda: MemoryPodConfigRepository()

        response = client.get("/v1/network/checks/ports", headers=admin_headers, params={"interval": "PT5S"})

        assert response.status_code == 400
        assert response.json()["error"] == "server_config_not_initialized"

    @pytest.mark.parametrize("interval", ["PT0.5S", "PT2M", "infinite", "five seconds"])
    def test_invalid_interval(self, client, admin_headers, interval):
        response = client.get(
            "/v1/network/checks",
            headers={**admin_headers, **SSE_HEADERS},
            params={"interval": interval},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "bad_request"


class TestBatchMode:

    def test_all_checks(self, client, admin_headers):
        response = client.get("/v1/network/checks", headers=admin_headers)

        assert response.status_code == 200
        results = response.json()
        assert [(r["id"], r["data"]["status"]) for r in results] == [
            ("IPv4", "VALID"),
            ("SRV-c2s", "VALID"),
            ("SRV-s2s", "VALID"),
            ("TCP-c2s", "OPEN"),
            ("TCP-s2s", "OPEN"),
            ("TCP-HTTPS", "OPEN"),
            ("IPv4-c2s", "SUCCESS"),
            ("IPv6-c2s", "MISSING"),
            ("IPv4-s2s", "SUCCESS"),
            ("IPv6-s2s", "MISSING"),
        ]
        assert results[0] == {
            "id": "IPv4",
            "event": "dns-record-check-result",
            "data": {"description": "IPv4 record for xmpp.example.org", "status": "VALID"},
        }

    def test_dns_checks_report_reason(self, client, checker, admin_headers):
        checker.a = {}

        response = client.get("/v1/network/checks/dns", headers=admin_headers)

        first = response.json()[0]
        assert first["data"]["status"] == "ERROR"
        assert first["data"]["reason"] == "no A record for xmpp.example.org."

    def test_port_checks_run_once(self, client, checker, admin_headers):
        checker.open_ports = set()

        response = client.get("/v1/network/checks/ports", headers=admin_headers)

        assert [r["data"]["status"] for r in response.json()] == ["CLOSED", "CLOSED", "CLOSED"]
        assert response.json()[2]["data"]["description"] == "HTTP server port at TCP 443"

    def test_ip_checks(self, client, admin_headers):
        response = client.get("/v1/network/checks/ip", headers=admin_headers)

        assert [r["id"] for r in response.json()] == ["IPv4-c2s", "IPv6-c2s", "IPv4-s2s", "IPv6-s2s"]
        assert {r["event"] for r in response.json()} == {"ip-connectivity-check-result"}

    def test_federation_disabled_skips_server_checks(self, client, repository, admin_headers):
        repository._federation_enabled = False

        response = client.get("/v1/network/checks", headers=admin_headers)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [
            "IPv4",
            "SRV-c2s",
            "TCP-c2s",
            "TCP-HTTPS",
            "IPv4-c2s",
            "IPv6-c2s",
        ]


class TestStreamMode:

    def test_stream(self, client, admin_headers):
        response = client.get(
            "/v1/network/checks",
            headers={**admin_headers, **SSE_HEADERS},
            params={"interval": "PT1S"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")

        events = parse_sse(response.text)
        assert events[-1] == {"event": "end", "id": "end", "": "End of stream"}
        assert sum(1 for event in events if event.get("event") == "end") == 1

        check_events = events[:-1]
        statuses = {}
        for event in check_events:
            statuses.setdefault(event["id"], []).append(json.loads(event["data"])["status"])
        assert len(statuses) == 10
        for check_statuses in statuses.values():
            assert check_statuses[0] == "QUEUED"
            assert check_statuses[1] == "CHECKING"
        assert statuses["TCP-HTTPS"] == ["QUEUED", "CHECKING", "OPEN"]
        assert statuses["IPv6-c2s"][-1] == "MISSING"

    def test_stream_event_framing(self, client, admin_headers):
        response = client.get("/v1/network/checks/dns", headers={**admin_headers, **SSE_HEADERS})

        first = parse_sse(response.text)[0]
        assert first["event"] == "dns-record-check-result"
        assert first["id"] == "IPv4"
        assert json.loads(first["data"]) == {"description": "IPv4 record for xmpp.example.org", "status": "QUEUED"}
