"""AuthSession -- 客户端登录态

登录/注册成功后保存用户信息，可选持久化到本地 JSON 文件，
下次启动时通过 restore() 恢复。
"""

from pathlib import Path

import structlog
from pydantic import ValidationError
from skytask.core.exceptions import SkyTaskError
from skytask.core.models import NewUser, PublicUser

from .store import OperationResult

log = structlog.get_logger()


class AuthSession:
    """客户端登录态"""

    def __init__(self, api, storage_path: str | Path | None = None) -> None:
        """
        Args:
            api: SkyTaskApi 或具有相同异步方法的对象
            storage_path: 用户信息持久化文件，None 表示不持久化
        """
        self._api = api
        self._storage_path = Path(storage_path) if storage_path else None
        self.user: PublicUser | None = None
        self.loading = False
        self.error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def login(self, username: str, password: str) -> OperationResult:
        return await self._authenticate("login", self._api.login(username, password))

    async def register(self, new_user: NewUser) -> OperationResult:
        return await self._authenticate("register", self._api.register(new_user))

    async def _authenticate(self, operation: str, call) -> OperationResult:
        self.loading = True
        self.error = None
        try:
            user = await call
        except SkyTaskError as e:
            self.error = e.message
            log.info("auth_failed", operation=operation, code=e.code)
            return OperationResult(ok=False, error=e.message)
        finally:
            self.loading = False

        self.user = user
        self._persist()
        log.info("auth_succeeded", operation=operation, user_id=user.id)
        return OperationResult(ok=True, value=user)

    def logout(self) -> None:
        """登出并删除持久化的用户信息"""
        self.user = None
        self.error = None
        if self._storage_path is not None:
            self._storage_path.unlink(missing_ok=True)

    def restore(self) -> bool:
        """从持久化文件恢复登录态，返回是否恢复成功"""
        if self._storage_path is None or not self._storage_path.exists():
            return False
        try:
            self.user = PublicUser.model_validate_json(self._storage_path.read_text("utf-8"))
        except ValidationError as e:
            log.warning("auth_restore_failed", path=str(self._storage_path), error=str(e))
            return False
        return True

    def _persist(self) -> None:
        if self._storage_path is None or self.user is None:
            return
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._storage_path.write_text(
            self.user.model_dump_json(by_alias=True),
            encoding="utf-8",
        )
