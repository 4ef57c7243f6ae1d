"""Tests for client identity resolution."""

from starlette.requests import Request

from contact_intake.core.client_identity import UNKNOWN_CLIENT, resolve_client_identity


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/v1/contact",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_prefers_first_forwarded_for_entry() -> None:
    request = _request(
        headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.2, 10.0.0.1"},
        client=("10.0.0.1", 5000),
    )
    assert resolve_client_identity(request) == "203.0.113.9"


def test_trims_whitespace_around_forwarded_entry() -> None:
    request = _request(headers={"X-Forwarded-For": "  203.0.113.9 ,10.0.0.2"})
    assert resolve_client_identity(request) == "203.0.113.9"


def test_falls_back_to_connection_address() -> None:
    request = _request(client=("192.0.2.44", 51000))
    assert resolve_client_identity(request) == "192.0.2.44"


def test_blank_forwarded_header_falls_back_to_connection_address() -> None:
    request = _request(headers={"X-Forwarded-For": " , 10.0.0.2"}, client=("192.0.2.44", 1))
    assert resolve_client_identity(request) == "192.0.2.44"


def test_unknown_when_no_metadata() -> None:
    assert resolve_client_identity(_request()) == UNKNOWN_CLIENT


def test_forwarded_header_ignored_when_not_trusted() -> None:
    request = _request(
        headers={"X-Forwarded-For": "203.0.113.9"},
        client=("192.0.2.44", 51000),
    )
    assert resolve_client_identity(request, trust_forwarded_for=False) == "192.0.2.44"
