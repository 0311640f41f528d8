"""WeatherClient -- OpenWeatherMap 调用封装

当前天气来自 /data/2.5/weather，短期预报来自 /data/2.5/forecast（3 小时粒度），
预报按日期取每天第一条，跳过今天，保留之后的 forecast_days 天。
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
import structlog

from .config import WeatherConfig
from .exceptions import WeatherError, WeatherUnreachableError
from .models import CurrentConditions, ForecastDay, WeatherReport

log = structlog.get_logger()

# 连接类异常类型集合（触发 WeatherUnreachableError）
_CONNECTION_ERROR_TYPES = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.NetworkError,
)


class WeatherClient:
    """天气服务客户端"""

    def __init__(
        self,
        base_url: str = "https://api.openweathermap.org",
        api_key: str = "",
        units: str = "imperial",
        timeout_s: float = 10,
        forecast_days: int = 3,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """初始化天气服务客户端

        Args:
            base_url: 服务基础 URL
            api_key: API key
            units: 单位制（imperial/metric/standard）
            timeout_s: 请求超时（秒）
            forecast_days: 返回的预报天数
            http_client: 外部提供的 httpx.AsyncClient（不会被关闭），None 时每次调用新建
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._units = units
        self._timeout_s = timeout_s
        self._forecast_days = forecast_days
        self._http_client = http_client

    @classmethod
    def from_config(
        cls,
        config: WeatherConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> "WeatherClient":
        """从 WeatherConfig 创建客户端"""
        return cls(
            base_url=config.base_url,
            api_key=config.api_key.get_secret_value(),
            units=config.units,
            timeout_s=config.timeout_s,
            http_client=http_client,
        )

    async def fetch_weather(self, location: str) -> WeatherReport:
        """查询指定地点的当前天气与短期预报

        Args:
            location: 地点名称，如 "New York"

        Returns:
            WeatherReport

        Raises:
            WeatherUnreachableError: 服务连接失败或超时
            WeatherError: 服务返回错误或数据格式不符合预期
        """
        start_time = time.monotonic()
        async with self._client() as client:
            current_data = await self._get_json(client, "/data/2.5/weather", location)
            forecast_data = await self._get_json(client, "/data/2.5/forecast", location)

        try:
            report = WeatherReport(
                location=current_data.get("name") or location,
                current=parse_current(current_data),
                forecast=parse_forecast(forecast_data.get("list", []), self._forecast_days),
            )
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise WeatherError(f"Unexpected weather payload: {e}") from e

        log.info(
            "weather_fetched",
            location=report.location,
            forecast_days=len(report.forecast),
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return report

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            yield client

    async def _get_json(self, client: httpx.AsyncClient, path: str, location: str) -> dict:
        """GET 请求并解析 JSON，错误转换为 WeatherError 体系"""
        url = f"{self._base_url}{path}"
        params = {"q": location, "appid": self._api_key, "units": self._units}
        try:
            resp = await client.get(url, params=params, timeout=self._timeout_s)
        except _CONNECTION_ERROR_TYPES as e:
            log.warning("weather_unreachable", url=url, error=str(e))
            raise WeatherUnreachableError(self._base_url, e) from e

        if resp.status_code != 200:
            log.warning(
                "weather_request_failed",
                url=url,
                status_code=resp.status_code,
            )
            raise WeatherError(
                f"Weather API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise WeatherError(f"Weather API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.warning("weather_unexpected_payload", url=url, payload_type=type(data).__name__)
            raise WeatherError(
                f"Unexpected weather payload: expected an object, got {type(data).__name__}"
            )
        return data


def parse_current(data: dict) -> CurrentConditions:
    """解析当前天气响应"""
    weather = data["weather"][0]
    return CurrentConditions(
        temp=round(data["main"]["temp"]),
        humidity=data["main"]["humidity"],
        wind_speed=round(data["wind"]["speed"]),
        condition_code=weather["main"],
        description=weather.get("description", ""),
        icon=weather.get("icon", ""),
    )


def parse_forecast(items: list[dict], days: int) -> list[ForecastDay]:
    """按 UTC 日期取每天第一条预报，跳过第一天（今天），返回之后的 days 天"""
    daily: dict = {}
    for item in items:
        day = datetime.fromtimestamp(item["dt"], UTC).date()
        if day in daily:
            continue
        weather = item["weather"][0]
        daily[day] = ForecastDay(
            date=day,
            temp=round(item["main"]["temp"]),
            condition_code=weather["main"],
            icon=weather.get("icon", ""),
        )
    return list(daily.values())[1 : 1 + days]
