"""健康检查与请求日志中间件测试"""

from httpx import AsyncClient


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    async def test_ready(self, client: AsyncClient):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["backend"] == "memory"
        assert data["checks"]["storage"] == "ok"

    async def test_ready_reports_storage_failure(self, client: AsyncClient, app):
        class BrokenRepository:
            async def ping(self):
                raise RuntimeError("disk on fire")

        app.state.repository = BrokenRepository()
        resp = await client.get("/ready")
        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["storage"].startswith("error:")


class TestRequestId:
    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.get("/health")
        assert len(resp.headers["X-Request-ID"]) == 26  # ULID 长度

    async def test_request_ids_differ(self, client: AsyncClient):
        first = await client.get("/health")
        second = await client.get("/health")
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
