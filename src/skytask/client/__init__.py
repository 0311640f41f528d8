"""SkyTask Client -- 客户端状态层

SkyTaskApi 负责 HTTP 调用；TaskStore 维护任务本地副本与筛选视图；
AuthSession 维护登录态；WeatherPanel 维护天气状态。
"""

from .api import SkyTaskApi
from .config import ClientConfig, load_client_config
from .session import AuthSession
from .store import OperationResult, SyncStatus, TaskState, TaskStore, apply_filter
from .weather_panel import OutdoorTaskWeather, WeatherPanel

__all__ = [
    "SkyTaskApi",
    "ClientConfig",
    "load_client_config",
    "TaskStore",
    "TaskState",
    "SyncStatus",
    "OperationResult",
    "apply_filter",
    "AuthSession",
    "WeatherPanel",
    "OutdoorTaskWeather",
]
