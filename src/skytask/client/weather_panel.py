"""WeatherPanel -- 客户端天气状态

刷新失败只记录 error，不影响任务处理；
annotate() 为户外任务附上当前天气。
"""

from dataclasses import dataclass

import structlog
from skytask.core.models import Task
from skytask.weather import (
    CurrentConditions,
    WeatherClient,
    WeatherConfig,
    WeatherError,
    WeatherReport,
)

from .store import OperationResult

log = structlog.get_logger()


@dataclass(frozen=True)
class OutdoorTaskWeather:
    """户外任务 + 当前天气（天气不可用时为 None）"""

    task: Task
    current: CurrentConditions | None


class WeatherPanel:
    """客户端天气状态"""

    def __init__(self, client: WeatherClient, default_location: str = "New York") -> None:
        self._client = client
        self.default_location = default_location
        self.report: WeatherReport | None = None
        self.loading = False
        self.error: str | None = None

    @classmethod
    def from_config(
        cls,
        config: WeatherConfig,
        client: WeatherClient | None = None,
    ) -> "WeatherPanel":
        """从 WeatherConfig 创建；默认地点取 config.default_location"""
        return cls(
            client or WeatherClient.from_config(config),
            default_location=config.default_location,
        )

    async def refresh(self, location: str | None = None) -> OperationResult:
        """查询天气；失败时保留上一次的 report"""
        location = location or self.default_location
        self.loading = True
        self.error = None
        try:
            report = await self._client.fetch_weather(location)
        except WeatherError as e:
            self.error = str(e)
            log.warning("weather_refresh_failed", location=location, error=str(e))
            return OperationResult(ok=False, error=self.error)
        finally:
            self.loading = False

        self.report = report
        return OperationResult(ok=True, value=report)

    def annotate(self, tasks) -> list[OutdoorTaskWeather]:
        """只为户外任务附上当前天气"""
        current = self.report.current if self.report else None
        return [OutdoorTaskWeather(task=t, current=current) for t in tasks if t.is_outdoor]
