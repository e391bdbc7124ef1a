"""Unit tests for the client facade."""

from pathlib import Path
from typing import Any, ClassVar
from unittest.mock import patch

import pytest

from zendesk_client import (
    ClientConfig,
    HttpStatusError,
    RateLimitError,
    ResourceProfile,
    RetryPolicy,
    SideLoadMapping,
    ThrottleConfig,
    ZendeskClient,
)
from zendesk_client.http.models import RawResponse
from zendesk_client.testing import MockTransport
from zendesk_client.throttle import TokenBucketRateLimiter


REMOTE = "https://acme.zendesk.com/api/v2"


class TicketsClient(ZendeskClient):
    """Client for the tickets resource."""

    resource: ClassVar[ResourceProfile] = ResourceProfile(
        envelope_keys=("ticket", "tickets"),
        side_load_map=(
            SideLoadMapping(field="requester_id", name="requester", dataset="users"),
            SideLoadMapping(
                field="organization_id", name="organization", dataset="organizations"
            ),
        ),
    )


class CountingLimiter:
    """Limiter that never waits and counts tokens."""

    def __init__(self) -> None:
        self.acquired = 0

    def acquire(self, tokens: int = 1) -> bool:
        self.acquired += tokens
        return True

    def try_acquire(self, tokens: int = 1) -> bool:
        return self.acquire(tokens)


class TestRequest:
    """Tests for single requests."""

    def test_request_uses_resource_profile(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Subclasses unwrap their envelope and resolve side-loads."""
        transport.register_json(
            f"{REMOTE}/tickets/1.json?include=users",
            {
                "ticket": {"id": 1, "requester_id": 7},
                "users": [{"id": 7, "name": "Ann"}],
            },
        )
        client = TicketsClient(config, transport=transport)

        response = client.request("GET", ["tickets", 1], side_load=["users"])

        assert response.body == {
            "id": 1,
            "requester_id": 7,
            "requester": {"id": 7, "name": "Ann"},
        }

    def test_base_client_returns_whole_body(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Without a profile the decoded body is the payload."""
        transport.register_json(f"{REMOTE}/users/me.json", {"user": {"id": 1}})

        response = ZendeskClient(config, transport=transport).request(
            "GET", ["users", "me"]
        )

        assert response.body == {"user": {"id": 1}}

    def test_set_side_load(self, config: ClientConfig, transport: MockTransport) -> None:
        """The installed include list applies to later calls."""
        transport.register_json(
            f"{REMOTE}/tickets.json?include=users,organizations", {"tickets": []}
        )
        client = TicketsClient(config, transport=transport)

        client.set_side_load(["users", "organizations"])
        client.request("GET", ["tickets"])

        assert client.side_load == ("users", "organizations")
        assert transport.stats.requests_matched == 1

    def test_hooks_subscription(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Hooks subscribed on the client see executor events."""
        transport.register_json(f"{REMOTE}/tickets.json", {"tickets": []})
        client = ZendeskClient(config, transport=transport)
        responses: list[Any] = []
        client.on("debug::response", responses.append)

        client.request("GET", ["tickets"])
        client.off("debug::response", responses.append)
        client.request("GET", ["tickets"])

        assert len(responses) == 1

    def test_errors_surface(self, config: ClientConfig, transport: MockTransport) -> None:
        """Failures are raised to the caller."""
        transport.register_json(f"{REMOTE}/tickets/2.json", {}, status_code=404)

        with pytest.raises(HttpStatusError, match="Item not found"):
            ZendeskClient(config, transport=transport).request("GET", ["tickets", 2])


class TestRequestAll:
    """Tests for paginated requests."""

    def test_collects_and_resolves_every_page(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Every page is unwrapped, side-loaded and flattened."""
        page_2 = f"{REMOTE}/tickets.json?page=2"
        transport.register_json(
            f"{REMOTE}/tickets.json?include=users,organizations",
            {
                "tickets": [{"id": 1, "requester_id": 7, "organization_id": 3}],
                "users": [{"id": 7, "name": "Ann"}],
                "organizations": [{"id": 3, "name": "Acme"}],
                "next_page": page_2,
            },
        )
        transport.register_json(
            page_2,
            {
                "tickets": [{"id": 2, "requester_id": 8}],
                "users": [{"id": 8, "name": "Bo"}],
                "next_page": None,
            },
        )
        client = TicketsClient(config, transport=transport)

        result = client.request_all(
            "GET", ["tickets"], side_load=["users", "organizations"]
        )

        assert result.statuses == [200, 200]
        assert [t["id"] for t in result.body] == [1, 2]
        assert result.body[0]["organization"] == {"id": 3, "name": "Acme"}
        assert result.body[1]["requester"] == {"id": 8, "name": "Bo"}
        assert "organization" not in result.body[1]
        assert [r.method for r in transport.requests] == ["GET", "GET"]

    def test_iter_pages(self, config: ClientConfig, transport: MockTransport) -> None:
        """Pages can be consumed lazily."""
        page_2 = f"{REMOTE}/tickets.json?page=2"
        transport.register_json(
            f"{REMOTE}/tickets.json", {"tickets": [{"id": 1}], "next_page": page_2}
        )
        transport.register_json(page_2, {"tickets": [{"id": 2}], "next_page": ""})
        client = TicketsClient(config, transport=transport)

        bodies = [page.body for page in client.iter_pages("GET", ["tickets"])]

        assert bodies == [[{"id": 1}], [{"id": 2}]]

    def test_throttle_covers_every_page(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Each page fetch takes a token, the first one included."""
        page_2 = f"{REMOTE}/tickets.json?page=2"
        transport.register_json(
            f"{REMOTE}/tickets.json", {"tickets": [], "next_page": page_2}
        )
        transport.register_json(page_2, {"tickets": [], "next_page": None})
        limiter = CountingLimiter()

        TicketsClient(config, transport=transport, rate_limiter=limiter).request_all(
            "GET", ["tickets"]
        )

        assert limiter.acquired == 2

    def test_failure_is_atomic(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """A failing later page raises instead of returning partial data."""
        page_2 = f"{REMOTE}/tickets.json?page=2"
        transport.register_json(
            f"{REMOTE}/tickets.json", {"tickets": [{"id": 1}], "next_page": page_2}
        )
        transport.register_json(page_2, {"error": "x"}, status_code=500)

        with pytest.raises(HttpStatusError) as exc_info:
            TicketsClient(config, transport=transport).request_all("GET", ["tickets"])

        assert exc_info.value.status_code == 500


class TestDecorators:
    """Tests for the opt-in retry and throttle layers."""

    def test_no_retry_by_default(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Rate limits surface immediately without a retry policy."""
        transport.register_json(
            f"{REMOTE}/tickets.json", {}, status_code=429, headers={"Retry-After": "1"}
        )

        with pytest.raises(RateLimitError):
            ZendeskClient(config, transport=transport).request("GET", ["tickets"])

        assert transport.stats.requests_total == 1

    def test_retry_policy_honours_retry_after(self, transport: MockTransport) -> None:
        """A configured policy retries rate limits after the server's delay."""
        config = ClientConfig(
            remote_uri=REMOTE,
            username="agent@acme.com",
            token="t",
            retry_policy=RetryPolicy(max_retries=2),
        )
        url = f"{REMOTE}/tickets.json"
        transport.register(
            url,
            RawResponse.from_json({}, status_code=429, headers={"Retry-After": "3"}),
        )
        transport.register_json(url, {"tickets": [{"id": 1}]})
        sleeps: list[float] = []

        response = ZendeskClient(config, transport=transport, sleep=sleeps.append).request(
            "GET", ["tickets"]
        )

        assert response.body == {"tickets": [{"id": 1}]}
        assert sleeps == [3.0]
        assert transport.stats.requests_total == 2

    def test_throttle_from_config(self, transport: MockTransport) -> None:
        """A throttle section builds a token-bucket limiter."""
        config = ClientConfig(
            remote_uri=REMOTE,
            username="agent@acme.com",
            token="t",
            throttle=ThrottleConfig(max_qps=0.01),
        )
        transport.register_json(f"{REMOTE}/tickets.json", {"tickets": []})
        client = ZendeskClient(config, transport=transport)

        client.request("GET", ["tickets"])

        assert isinstance(client._rate_limiter, TokenBucketRateLimiter)
        assert client._rate_limiter.get_available_tokens() < 1.0


class TestUploadAndLifecycle:
    """Tests for uploads and closing."""

    def test_request_upload(
        self, tmp_path: Path, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Uploads stream the file through the transport."""
        attachment = tmp_path / "notes.txt"
        attachment.write_bytes(b"hello")
        transport.register_json(
            f"{REMOTE}/uploads.json?filename=notes.txt", {"upload": {"token": "u1"}}
        )

        response = ZendeskClient(config, transport=transport).request_upload(
            ["uploads", "?filename=notes.txt"], attachment
        )

        assert response.body == {"upload": {"token": "u1"}}
        assert transport.stats.request_log[0].upload == b"hello"

    def test_default_transport_is_httpx(self, config: ClientConfig) -> None:
        """Without an injected transport the httpx transport is built."""
        with patch("zendesk_client.client.HttpxTransport") as transport_cls:
            client = ZendeskClient(config)
            client.close()

        transport_cls.assert_called_once_with(config)
        transport_cls.return_value.close.assert_called_once_with()

    def test_context_manager_closes_transport(
        self, config: ClientConfig, transport: MockTransport
    ) -> None:
        """Leaving the context closes the transport."""
        with ZendeskClient(config, transport=transport) as client:
            assert client.config is config

        assert transport.closed is True
