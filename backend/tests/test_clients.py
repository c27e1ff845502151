"""Service-to-service clients against an in-process httpx transport."""

import json

import httpx
import pytest

from apogee.clients import BenefitDesignerClient, QuotingClient
from apogee.clients.base import SERVICE_KEY_HEADER
from apogee.core.errors import InvalidStateError, NotFoundError, UpstreamError


def transport(handler, seen: list | None = None) -> httpx.MockTransport:
    def record(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


class TestQuotingClient:

    @pytest.mark.asyncio
    async def test_sends_service_key_and_conditional_status(self):
        seen = []
        client = QuotingClient(
            "http://quoting:8001/",
            service_key="k1",
            transport=transport(lambda r: httpx.Response(200, json={"id": 5, "status": "Archived"}), seen),
        )

        result = await client.update_quote_status(5, "Archived", expected_status="Ready for Sale")

        assert result["status"] == "Archived"
        [request] = seen
        assert request.method == "PATCH"
        assert str(request.url) == "http://quoting:8001/api/v1/quotes/5"
        assert request.headers[SERVICE_KEY_HEADER] == "k1"
        assert json.loads(request.content) == {"status": "Archived", "expectedStatus": "Ready for Sale"}

    @pytest.mark.asyncio
    async def test_conflict_becomes_invalid_state(self):
        client = QuotingClient(
            "http://quoting:8001",
            transport=transport(lambda r: httpx.Response(
                409, json={"error": "InvalidStateError", "message": 'Quote is not in "Ready for Sale" status'}
            )),
        )
        with pytest.raises(InvalidStateError, match='Quote is not in "Ready for Sale" status'):
            await client.update_quote_status(5, "Archived", expected_status="Ready for Sale")

    @pytest.mark.asyncio
    async def test_missing_quote(self):
        client = QuotingClient("http://quoting:8001", transport=transport(lambda r: httpx.Response(404)))
        with pytest.raises(NotFoundError, match="Quote not found"):
            await client.get_quote_detail(5)

    @pytest.mark.asyncio
    async def test_server_error_becomes_upstream_error(self):
        client = QuotingClient("http://quoting:8001", transport=transport(lambda r: httpx.Response(503, text="down")))
        with pytest.raises(UpstreamError) as exc_info:
            await client.get_quote_detail(5)
        assert exc_info.value.upstream_status == 503
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_unreachable_service(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = QuotingClient("http://quoting:8001", transport=transport(refuse))
        with pytest.raises(UpstreamError, match="Quoting service is unreachable"):
            await client.list_quotes()

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self):
        seen = []
        client = QuotingClient("http://quoting:8001", transport=transport(lambda r: httpx.Response(200, json=[]), seen))
        await client.list_quotes(status="Ready for Sale")
        assert dict(seen[0].url.params) == {"status": "Ready for Sale"}


class TestBenefitDesignerClient:

    @pytest.mark.asyncio
    async def test_fetch_templates_by_type_asks_for_latest_active(self):
        seen = []
        client = BenefitDesignerClient(
            "http://designer:8003",
            transport=transport(lambda r: httpx.Response(200, json=[{"id": 1}]), seen),
        )

        assert await client.fetch_templates_by_type("individual") == [{"id": 1}]
        assert dict(seen[0].url.params) == {"type": "individual", "status": "active", "latest": "true"}

    @pytest.mark.asyncio
    async def test_missing_template(self):
        client = BenefitDesignerClient("http://designer:8003", transport=transport(lambda r: httpx.Response(404)))
        with pytest.raises(NotFoundError, match="Template not found"):
            await client.get_template(3)
