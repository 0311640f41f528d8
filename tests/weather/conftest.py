"""Weather 测试 fixtures -- OpenWeatherMap 响应样例"""

from datetime import UTC, datetime

import pytest


def _ts(day: int, hour: int) -> int:
    return int(datetime(2025, 6, day, hour, 0, tzinfo=UTC).timestamp())


@pytest.fixture
def current_payload() -> dict:
    return {
        "name": "New York",
        "main": {"temp": 71.6, "humidity": 64},
        "wind": {"speed": 8.4},
        "weather": [{"main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    }


@pytest.fixture
def forecast_payload() -> dict:
    """6 月 4 日（今天）到 6 月 8 日，每天两条 3 小时预报"""
    items = []
    for day, temp, main in [
        (4, 70.2, "Clouds"),
        (5, 75.5, "Clear"),
        (6, 68.4, "Rain"),
        (7, 66.0, "Rain"),
        (8, 80.9, "Clear"),
    ]:
        for hour in (9, 12):
            items.append(
                {
                    "dt": _ts(day, hour),
                    "main": {"temp": temp + hour / 100},
                    "weather": [{"main": main, "icon": "01d"}],
                }
            )
    return {"list": items}
