"""Axiom 로깅 미들웨어 테스트.

Axiom logging middleware tests — one event per request, masking, error
detail capture and pass-through when ingest fails.
"""

from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.middleware.axiom_logging import AxiomLoggingMiddleware, extract_error_detail, mask_sensitive
from app.utils.exceptions import NotFoundError


class FakeAxiomClient:
    """ingest_events 호출을 기록하는 가짜 클라이언트."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[dict[str, Any]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise RuntimeError("axiom down")
        for event in events:
            self.events.append({"dataset": dataset, **event})


def build_app(fake: FakeAxiomClient) -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(AxiomLoggingMiddleware, client=fake, dataset="api-logs")

    @test_app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @test_app.get("/items/{code}")
    async def get_item(code: str) -> dict[str, str]:
        raise NotFoundError(f"SWIFT code {code} not found.")

    @test_app.post("/items")
    async def create_item(payload: dict) -> dict[str, str]:
        return {"message": "ok"}

    return test_app


@pytest_asyncio.fixture
async def fake_client():
    return FakeAxiomClient()


async def _request(test_app: FastAPI, method: str, path: str, **kwargs):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        return await ac.request(method, path, **kwargs)


class TestAxiomLoggingMiddleware:
    """미들웨어 동작 테스트."""

    async def test_logs_post_with_masked_body(self, fake_client):
        res = await _request(build_app(fake_client), "POST", "/items", json={"swiftCode": "X", "api_key": "s3cret"})
        assert res.status_code == 200
        [event] = fake_client.events
        assert event["dataset"] == "api-logs"
        assert event["method"] == "POST"
        assert event["status_code"] == 200
        assert event["request_body"] == {"swiftCode": "X", "api_key": "***"}
        assert "error" not in event

    async def test_logs_error_detail_and_keeps_body(self, fake_client):
        res = await _request(build_app(fake_client), "GET", "/items/NOPENOPEXXX")
        assert res.status_code == 404
        assert res.json() == {"detail": "SWIFT code NOPENOPEXXX not found."}
        [event] = fake_client.events
        assert event["error"] == "SWIFT code NOPENOPEXXX not found."

    async def test_skips_health(self, fake_client):
        await _request(build_app(fake_client), "GET", "/health")
        assert fake_client.events == []

    async def test_ingest_failure_does_not_break_request(self):
        res = await _request(build_app(FakeAxiomClient(fail=True)), "GET", "/items/ABC")
        assert res.status_code == 404


class TestHelpers:
    def test_mask_nested(self):
        assert mask_sensitive({"a": [{"token": "t"}], "b": 1}) == {"a": [{"token": "***"}], "b": 1}

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            (b'{"detail": "gone"}', "gone"),
            (b"plain text", "plain text"),
        ],
    )
    def test_extract_error_detail(self, body, expected):
        assert extract_error_detail(body) == expected

    def test_extract_validation_errors(self):
        detail = extract_error_detail(b'{"detail": "Validation failed", "errors": {"swiftCode": ["bad"]}}')
        assert "Validation failed" in detail
        assert "swiftCode" in detail
