"""SkyTaskApi -- SkyTask REST API 的异步客户端

错误响应按状态码还原为 skytask.core.exceptions 中的异常；
连接失败、超时与无法解析的响应统一为 TransientServiceError。
"""

import httpx
import structlog
from pydantic import ValidationError
from skytask.core.exceptions import SkyTaskError, TransientServiceError, error_for_status
from skytask.core.models import NewUser, PublicUser, Task, TaskInput, TaskStats

from .config import ClientConfig

log = structlog.get_logger()


class SkyTaskApi:
    """SkyTask API 客户端"""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout_s: float = 10,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: API 基础 URL
            timeout_s: 请求超时（秒）
            http_client: 外部提供的 httpx.AsyncClient（如测试用 ASGITransport），
                         提供时忽略 base_url/timeout_s，且 aclose() 不会关闭它
        """
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_s,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "SkyTaskApi":
        return cls(base_url=config.api_base_url, timeout_s=config.timeout_s)

    async def __aenter__(self) -> "SkyTaskApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # 用户

    async def register(self, new_user: NewUser) -> PublicUser:
        resp = await self._request("POST", "/api/users/register", json=new_user.to_wire())
        return self._parse(PublicUser, self._json(resp))

    async def login(self, username: str, password: str) -> PublicUser:
        resp = await self._request(
            "POST",
            "/api/users/login",
            json={"username": username, "password": password},
        )
        return self._parse(PublicUser, self._json(resp))

    # 任务

    async def list_tasks(self, owner_id: int) -> list[Task]:
        resp = await self._request("GET", "/api/tasks", params={"userId": owner_id})
        data = self._json(resp)
        if not isinstance(data, list):
            raise TransientServiceError("Unexpected API response: expected a list of tasks")
        return [self._parse(Task, item) for item in data]

    async def create_task(self, task_input: TaskInput) -> Task:
        resp = await self._request(
            "POST",
            "/api/tasks",
            json=task_input.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._parse(Task, self._json(resp))

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/api/tasks/{task_id}")

    async def get_stats(self, owner_id: int) -> TaskStats:
        resp = await self._request("GET", f"/api/tasks/stats/{owner_id}")
        return self._parse(TaskStats, self._json(resp))

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """发送请求，错误响应转换为异常体系"""
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.warning("api_unreachable", method=method, path=path, error=str(e))
            raise TransientServiceError(f"API unreachable: {e}") from e

        if resp.status_code >= 400:
            raise self._error_from_response(resp)
        return resp

    @staticmethod
    def _error_from_response(resp: httpx.Response) -> SkyTaskError:
        """解析错误响应体 {"error": {"code", "message"}}"""
        code = None
        message = f"Request failed with status {resp.status_code}"
        try:
            error = resp.json().get("error") or {}
            code = error.get("code")
            message = error.get("message") or message
        except (ValueError, AttributeError):
            pass
        log.info("api_request_rejected", status_code=resp.status_code, code=code)
        return error_for_status(resp.status_code, message, code=code)

    @staticmethod
    def _json(resp: httpx.Response):
        """解析 JSON 响应体；非 JSON（如代理返回的 HTML）转换为 TransientServiceError"""
        try:
            return resp.json()
        except ValueError as e:
            log.warning("api_invalid_json", status_code=resp.status_code, error=str(e))
            raise TransientServiceError(f"API returned invalid JSON: {e}") from e

    @staticmethod
    def _parse(model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TransientServiceError(f"Unexpected API response: {e}") from e
