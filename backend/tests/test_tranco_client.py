"""Tranco 클라이언트 테스트 (httpx.MockTransport)."""
import asyncio

import httpx

from integrations.tranco import Failed, Found, NotFound, TrancoClient

BASE_URL = "https://tranco.test/rank"


def _fetch(handler, domain="example.com", timeout=5.0):
    async def run():
        client = TrancoClient(base_url=BASE_URL, timeout=timeout, transport=httpx.MockTransport(handler))
        try:
            return await client.fetch_ranking(domain)
        finally:
            await client.close()

    return asyncio.run(run())


class TestFetchRanking:
    """fetch_ranking 결과 매핑 테스트."""

    def test_found(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "domain": "example.com",
                    "ranks": [{"date": "2024-01-01", "rank": 5}, {"date": "2024-01-02", "rank": 6}],
                },
            )

        result = _fetch(handler)

        assert isinstance(result, Found)
        assert [(r.date, r.rank) for r in result.data.ranks] == [("2024-01-01", 5), ("2024-01-02", 6)]
        assert requests[0].url.path == "/rank/example.com"
        assert requests[0].headers["accept"] == "application/json"

    def test_rank_values_not_filtered(self):
        """순위 값의 타당성은 검사하지 않고 그대로 받아들임."""
        result = _fetch(
            lambda request: httpx.Response(
                200,
                json={
                    "domain": "example.com",
                    "ranks": [{"date": "2024-01-01", "rank": 5}, {"date": "2024-01-02", "rank": 0}],
                },
            )
        )

        assert isinstance(result, Found)
        assert [r.rank for r in result.data.ranks] == [5, 0]

    def test_missing_ranks_is_empty(self):
        result = _fetch(lambda request: httpx.Response(200, json={"domain": "example.com"}))

        assert isinstance(result, Found)
        assert result.data.ranks == []

    def test_not_found(self):
        result = _fetch(lambda request: httpx.Response(404, json={"message": "not ranked"}))

        assert result == NotFound("example.com")

    def test_server_error(self):
        result = _fetch(lambda request: httpx.Response(503))

        assert result == Failed("example.com", "HTTP 503")

    def test_invalid_json(self):
        result = _fetch(lambda request: httpx.Response(200, text="<html>oops</html>"))

        assert isinstance(result, Failed)
        assert result.reason.startswith("invalid JSON")

    def test_unexpected_shape(self):
        result = _fetch(
            lambda request: httpx.Response(200, json={"domain": "example.com", "ranks": [{"date": "2024-01-01"}]})
        )

        assert isinstance(result, Failed)
        assert "unexpected response shape" in result.reason

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _fetch(handler)

        assert result == Failed("example.com", "request error: ConnectError")

    def test_timeout(self):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json={"domain": "example.com", "ranks": []})

        result = _fetch(handler, timeout=0.05)

        assert result == Failed("example.com", "timeout")
