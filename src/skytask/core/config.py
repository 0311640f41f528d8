"""配置常量模块 -- 可通过环境变量覆盖

包含存储后端、SQLite 数据库路径、统计使用的本地时区等可配置项。
"""

import os
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# 支持的存储后端
STORAGE_BACKENDS: tuple[str, ...] = ("memory", "sqlite")


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("SKYTASK_DATA_DIR", "data"))


def get_storage_backend() -> str:
    """获取存储后端名称（memory / sqlite），默认 memory"""
    backend = os.environ.get("SKYTASK_STORAGE", "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unsupported SKYTASK_STORAGE={backend!r}, expected one of {STORAGE_BACKENDS}"
        )
    return backend


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "SKYTASK_DB_PATH",
        str(_get_base_dir() / "sqlite" / "skytask.db"),
    )


def _zone_from_key(key: str) -> tzinfo | None:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def _system_timezone(localtime: Path = Path("/etc/localtime")) -> tzinfo:
    """系统本地时区

    依次尝试 TZ 环境变量与 /etc/localtime 指向的 IANA 时区名，
    都无法解析时退回固定偏移（跨夏令时切换的统计窗口可能相差一小时）。
    """
    if key := os.environ.get("TZ", "").lstrip(":"):
        if zone := _zone_from_key(key):
            return zone

    if localtime.is_symlink():
        parts = localtime.resolve().parts
        if "zoneinfo" in parts:
            key = "/".join(parts[parts.index("zoneinfo") + 1 :])
            if zone := _zone_from_key(key):
                return zone

    return datetime.now().astimezone().tzinfo


def get_local_timezone() -> tzinfo:
    """获取统计口径使用的本地时区

    SKYTASK_TIMEZONE 为 IANA 时区名（如 "Asia/Shanghai"），未设置时使用系统本地时区。
    """
    name = os.environ.get("SKYTASK_TIMEZONE")
    if name:
        return ZoneInfo(name)
    return _system_timezone()
