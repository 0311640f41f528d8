"""任务路由测试

测试内容：
1. 创建任务：默认值、201、服务端分配 id/createdAt、校验失败 400
2. 查询任务：按用户作用域、userId 非法 400
3. 删除任务：204、幂等、id 非法 400
4. 错误响应体格式
"""

from datetime import UTC, datetime

from httpx import AsyncClient


async def _create(client: AsyncClient, **body) -> dict:
    body.setdefault("userId", 7)
    resp = await client.post("/api/tasks", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCreateTask:
    """POST /api/tasks"""

    async def test_defaults_filled(self, client: AsyncClient):
        """只提供 userId 与 title 时其余字段取默认值"""
        before = datetime.now(UTC)
        data = await _create(client, title="Buy milk")

        assert data["title"] == "Buy milk"
        assert data["userId"] == 7
        assert data["priority"] == "medium"
        assert data["isOutdoor"] is False
        assert data["description"] is None
        assert data["dueDate"] is None
        assert isinstance(data["id"], int)
        assert datetime.fromisoformat(data["createdAt"]) >= before

    async def test_all_fields(self, client: AsyncClient):
        data = await _create(
            client,
            title="Water plants",
            description="balcony",
            priority="low",
            isOutdoor=True,
            dueDate="2025-06-04T09:00:00+02:00",
        )
        assert data["priority"] == "low"
        assert data["isOutdoor"] is True
        assert data["description"] == "balcony"
        assert datetime.fromisoformat(data["dueDate"]) == datetime.fromisoformat(
            "2025-06-04T09:00:00+02:00"
        )

    async def test_title_trimmed(self, client: AsyncClient):
        data = await _create(client, title="  Call mom  ")
        assert data["title"] == "Call mom"

    async def test_ids_unique(self, client: AsyncClient):
        ids = {(await _create(client, title=f"t{i}"))["id"] for i in range(4)}
        assert len(ids) == 4

    async def test_blank_title_rejected(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"userId": 7, "title": "   "})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "TITLE_REQUIRED"

    async def test_missing_title_rejected(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"userId": 7})
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "title" in error["message"]

    async def test_missing_user_id_rejected(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"title": "orphan"})
        assert resp.status_code == 400

    async def test_bad_priority_rejected(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks", json={"userId": 7, "title": "x", "priority": "urgent"}
        )
        assert resp.status_code == 400

    async def test_bad_due_date_rejected(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks", json={"userId": 7, "title": "x", "dueDate": "next tuesday"}
        )
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_DUE_DATE"

    async def test_rejected_input_not_stored(self, client: AsyncClient):
        await client.post("/api/tasks", json={"userId": 7, "title": ""})
        resp = await client.get("/api/tasks", params={"userId": 7})
        assert resp.json() == []


class TestListTasks:
    """GET /api/tasks"""

    async def test_empty(self, client: AsyncClient):
        resp = await client.get("/api/tasks", params={"userId": 7})
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_scoped_to_owner(self, client: AsyncClient):
        await _create(client, userId=1, title="mine")
        await _create(client, userId=2, title="theirs")

        resp = await client.get("/api/tasks", params={"userId": 1})
        titles = [t["title"] for t in resp.json()]
        assert titles == ["mine"]

    async def test_missing_user_id(self, client: AsyncClient):
        resp = await client.get("/api/tasks")
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Valid userId is required"

    async def test_invalid_user_id(self, client: AsyncClient):
        resp = await client.get("/api/tasks", params={"userId": "abc"})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_ID"


class TestDeleteTask:
    """DELETE /api/tasks/{id}"""

    async def test_delete(self, client: AsyncClient):
        task = await _create(client, title="temp")
        resp = await client.delete(f"/api/tasks/{task['id']}")
        assert resp.status_code == 204
        assert resp.content == b""

        resp = await client.get("/api/tasks", params={"userId": 7})
        assert resp.json() == []

    async def test_delete_twice(self, client: AsyncClient):
        task = await _create(client, title="temp")
        first = await client.delete(f"/api/tasks/{task['id']}")
        second = await client.delete(f"/api/tasks/{task['id']}")
        assert first.status_code == 204
        assert second.status_code == 204

    async def test_delete_unknown_id(self, client: AsyncClient):
        resp = await client.delete("/api/tasks/999")
        assert resp.status_code == 204

    async def test_delete_invalid_id(self, client: AsyncClient):
        resp = await client.delete("/api/tasks/not-a-number")
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Valid task ID is required"


class _UnavailableRepository:
    async def create_task(self, new_task):
        raise RuntimeError("disk I/O error")

    async def list_by_owner(self, owner_id):
        raise RuntimeError("disk I/O error")


class TestStorageFailure:
    """存储层故障 -> 500 SERVICE_UNAVAILABLE，不泄露内部错误"""

    async def test_create_fails(self, app, client: AsyncClient):
        app.state.repository = _UnavailableRepository()
        resp = await client.post("/api/tasks", json={"userId": 7, "title": "x"})

        assert resp.status_code == 500
        assert resp.json() == {
            "error": {"code": "SERVICE_UNAVAILABLE", "message": "Failed to create task"}
        }

    async def test_list_fails(self, app, client: AsyncClient):
        app.state.repository = _UnavailableRepository()
        resp = await client.get("/api/tasks", params={"userId": 7})

        assert resp.status_code == 500
        assert "disk" not in resp.text
