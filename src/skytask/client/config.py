"""ClientConfig -- 客户端配置加载"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class ClientConfig(BaseModel):
    """客户端配置 -- 从环境变量加载

    环境变量:
        SKYTASK_API_URL: API 基础 URL（默认 http://127.0.0.1:8000）
        SKYTASK_API_TIMEOUT_S: 请求超时（秒，默认 10）
    """

    api_base_url: str = Field(default="http://127.0.0.1:8000", description="API 基础 URL")
    timeout_s: float = Field(default=10, gt=0, description="请求超时（秒）")


def load_client_config() -> ClientConfig:
    """从环境变量加载客户端配置"""
    kwargs: dict = {}

    if val := os.environ.get("SKYTASK_API_URL"):
        kwargs["api_base_url"] = val

    if val := os.environ.get("SKYTASK_API_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = float(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="SKYTASK_API_TIMEOUT_S",
                value=val,
                fallback=10,
            )

    return ClientConfig(**kwargs)
