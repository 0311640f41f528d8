"""SkyTask Weather -- 天气服务外部协作方

为户外任务提供当前天气与短期预报；天气失败不影响任务处理。
"""

from .client import WeatherClient
from .config import WeatherConfig, load_weather_config
from .exceptions import WeatherError, WeatherUnreachableError
from .models import CurrentConditions, ForecastDay, WeatherReport

__all__ = [
    "WeatherClient",
    "WeatherConfig",
    "load_weather_config",
    "WeatherError",
    "WeatherUnreachableError",
    "CurrentConditions",
    "ForecastDay",
    "WeatherReport",
]
