"""Unit tests for the pod configuration and DNS setup routes."""

from prose_pod_service.models.pod_address import DynamicPodAddress
from prose_pod_service.repositories import MemoryPodConfigRepository

from prose_pod_api.dependencies import get_pod_config_repository
from prose_pod_api.main import app


class TestPodAddress:

    def test_get_unset_address(self, client, admin_headers):
        app.dependency_overrides[get_pod_config_repository] = lambda: MemoryPodConfigRepository()

        response = client.get("/v1/pod/config/address", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() is None

    def test_get_static_address(self, client, admin_headers):
        response = client.get("/v1/pod/config/address", headers=admin_headers)

        assert response.json() == {"type": "static", "ipv4": "192.0.2.1", "ipv6": None, "hostname": None}

    def test_put_creates_then_replaces(self, client, admin_headers):
        repository = MemoryPodConfigRepository(server_domain="example.org")
        app.dependency_overrides[get_pod_config_repository] = lambda: repository

        created = client.put("/v1/pod/config/address", headers=admin_headers, json={"hostname": "pod.example.net."})
        replaced = client.put("/v1/pod/config/address", headers=admin_headers, json={"ipv6": "2001:db8::1"})

        assert created.status_code == 201
        assert created.json()["hostname"] == "pod.example.net"
        assert replaced.status_code == 200
        assert replaced.json()["ipv6"] == "2001:db8::1"

    def test_put_dynamic_address_is_stored(self, client, repository, admin_headers):
        client.put("/v1/pod/config/address", headers=admin_headers, json={"hostname": "pod.example.net"})
        assert repository._pod_address == DynamicPodAddress("pod.example.net")

    def test_put_requires_an_address(self, client, admin_headers):
        response = client.put("/v1/pod/config/address", headers=admin_headers, json={})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_put_rejects_wrong_ip_version(self, client, admin_headers):
        response = client.put("/v1/pod/config/address", headers=admin_headers, json={"ipv4": "2001:db8::1"})
        assert response.status_code == 400

    def test_requires_admin(self, client, member_headers):
        response = client.put("/v1/pod/config/address", headers=member_headers, json={"ipv4": "192.0.2.1"})
        assert response.status_code == 403


class TestDnsRecords:

    def test_static_pod_records(self, client, admin_headers):
        response = client.get("/v1/network/dns/records", headers=admin_headers)

        assert response.status_code == 200
        steps = response.json()["steps"]
        assert [step["purpose"] for step in steps] == [
            "specify your server IP address",
            "let clients connect to your server",
            "let servers connect to your server",
        ]
        assert steps[0]["records"] == [{
            "type": "A",
            "hostname": "xmpp.example.org.",
            "ttl": 600,
            "value": "192.0.2.1",
            "string_repr": "xmpp.example.org. 600 IN A 192.0.2.1",
        }]
        assert steps[2]["records"][0]["string_repr"] == (
            "_xmpp-server._tcp.example.org. 3600 IN SRV 0 5 5269 xmpp.example.org."
        )

    def test_dynamic_pod_records(self, client, repository, admin_headers):
        repository._pod_address = DynamicPodAddress("pod.example.net")

        steps = client.get("/v1/network/dns/records", headers=admin_headers).json()["steps"]

        assert len(steps) == 2
        assert steps[0]["records"][0]["target"] == "pod.example.net."
