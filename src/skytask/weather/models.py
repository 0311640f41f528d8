"""天气数据模型"""

import datetime as dt

from pydantic import Field
from skytask.core.models import CamelModel


class CurrentConditions(CamelModel):
    """当前天气"""

    temp: int = Field(description="温度（按配置单位取整）")
    humidity: int = Field(description="相对湿度（%）")
    wind_speed: int = Field(description="风速（取整）")
    condition_code: str = Field(description="天气大类，如 Clear / Rain")
    description: str = Field(default="", description="天气描述")
    icon: str = Field(default="", description="天气图标编码")


class ForecastDay(CamelModel):
    """单日预报（取当天第一条预报）"""

    date: dt.date
    temp: int
    condition_code: str
    icon: str = ""


class WeatherReport(CamelModel):
    """某地点的当前天气 + 短期预报"""

    location: str
    current: CurrentConditions
    forecast: list[ForecastDay] = Field(default_factory=list)
