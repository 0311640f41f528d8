"""User Domain Model

密码按原样保存（不做哈希），对外返回时使用 PublicUser 去掉 password。
"""

from pydantic import Field

from .base import CamelModel


class NewUser(CamelModel):
    """注册请求体 / 用户创建记录"""

    username: str = Field(min_length=1, description="用户名，唯一且区分大小写")
    password: str = Field(min_length=1, description="密码（不透明凭证）")
    name: str = Field(min_length=1, description="显示名")
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$", description="邮箱，唯一")


class PublicUser(CamelModel):
    """对外返回的用户信息（不含密码）"""

    id: int
    username: str
    name: str
    email: str


class User(PublicUser):
    """User 数据模型"""

    password: str

    def to_public(self) -> PublicUser:
        """去掉密码后的用户信息"""
        return PublicUser(**self.model_dump(exclude={"password"}))
