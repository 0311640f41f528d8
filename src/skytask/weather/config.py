"""WeatherConfig -- 天气服务配置加载

从环境变量加载配置，API key 不写入代码。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()


class WeatherConfig(BaseModel):
    """天气服务配置 -- 从环境变量加载

    环境变量:
        SKYTASK_WEATHER_URL: 服务地址（默认 OpenWeatherMap）
        SKYTASK_WEATHER_API_KEY: API key
        SKYTASK_WEATHER_UNITS: 单位制（imperial/metric/standard）
        SKYTASK_WEATHER_TIMEOUT_S: 请求超时（秒，默认 10）
        SKYTASK_WEATHER_LOCATION: 默认地点
    """

    base_url: str = Field(
        default="https://api.openweathermap.org",
        description="天气服务基础 URL",
    )
    api_key: SecretStr = Field(default=SecretStr(""), description="天气服务 API key")
    units: Literal["imperial", "metric", "standard"] = Field(
        default="imperial",
        description="单位制",
    )
    timeout_s: float = Field(default=10, gt=0, description="请求超时（秒）")
    default_location: str = Field(default="New York", description="默认地点")


def load_weather_config() -> WeatherConfig:
    """从环境变量加载天气服务配置

    Returns:
        WeatherConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("SKYTASK_WEATHER_URL"):
        kwargs["base_url"] = val

    if val := os.environ.get("SKYTASK_WEATHER_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("SKYTASK_WEATHER_UNITS"):
        kwargs["units"] = val

    if val := os.environ.get("SKYTASK_WEATHER_LOCATION"):
        kwargs["default_location"] = val

    if val := os.environ.get("SKYTASK_WEATHER_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = float(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="SKYTASK_WEATHER_TIMEOUT_S",
                value=val,
                fallback=10,
            )

    return WeatherConfig(**kwargs)
