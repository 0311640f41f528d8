"""UserService -- 注册/登录业务逻辑

登录按存储的密码原样比对（不做哈希）；对外返回的用户信息不含密码。
"""

import structlog
from skytask.core.exceptions import AuthError, InvalidInputError
from skytask.core.models import NewUser, PublicUser
from skytask.core.store import TaskRepository

from .task_service import repository_faults

log = structlog.get_logger()


class UserService:
    """用户业务服务"""

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def register(self, new_user: NewUser) -> PublicUser:
        """注册用户

        Raises:
            ConflictError: 用户名或邮箱已被占用
            TransientServiceError: 存储层故障
        """
        with repository_faults("register user"):
            user = await self._repository.create_user(new_user)
        log.info("user_registered", user_id=user.id)
        return user.to_public()

    async def login(self, username: str | None, password: str | None) -> PublicUser:
        """校验用户名与密码

        Raises:
            InvalidInputError: 缺少用户名或密码
            AuthError: 用户不存在或密码错误
        """
        if not username or not password:
            raise InvalidInputError(
                "Username and password are required",
                code="CREDENTIALS_REQUIRED",
            )

        with repository_faults("log in"):
            user = await self._repository.get_user_by_username(username)

        if user is None or user.password != password:
            log.info("login_failed", username=username)
            raise AuthError("Invalid credentials")

        log.info("user_logged_in", user_id=user.id)
        return user.to_public()
