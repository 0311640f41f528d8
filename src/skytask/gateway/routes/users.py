"""用户路由

POST /api/users/register: 注册用户，返回不含密码的用户信息。
POST /api/users/login: 用户名 + 密码登录。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from skytask.core.models import NewUser
from starlette.responses import JSONResponse

from ..deps import get_user_service
from ..services.user_service import UserService

router = APIRouter()


class LoginRequest(BaseModel):
    """登录请求体（字段缺失由服务层返回 400）"""

    username: str | None = Field(default=None, description="用户名")
    password: str | None = Field(default=None, description="密码")


@router.post("/api/users/register")
async def register_user(
    body: NewUser,
    service: UserService = Depends(get_user_service),
):
    """注册用户

    - 成功返回 201
    - 用户名或邮箱已被占用返回 409
    """
    user = await service.register(body)
    return JSONResponse(status_code=201, content=user.to_wire())


@router.post("/api/users/login")
async def login_user(
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    """登录

    - 缺少字段返回 400
    - 凭证错误返回 401
    """
    user = await service.login(body.username, body.password)
    return JSONResponse(status_code=200, content=user.to_wire())
