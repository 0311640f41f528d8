"""structlog 配置模块

所有日志经标准库 root logger 输出，每条记录带 service 字段：
  SKYTASK_LOG_FORMAT=json  结构化 JSON（生产环境）
  SKYTASK_LOG_FORMAT=dev   pretty print（默认）
  SKYTASK_LOG_LEVEL        日志级别，默认 INFO
"""

import logging
import os

import structlog

SERVICE_NAME = "skytask-gateway"

# 请求日志由 LoggingMiddleware 输出，这些 logger 只保留告警
_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "httpx")


def resolve_log_level(value: str | None) -> int:
    """把级别名（大小写不敏感）转换为 logging 常量，无法识别时为 INFO"""
    level = logging.getLevelName((value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def add_service(service: str) -> structlog.types.Processor:
    """生成为每条日志补充 service 字段的处理器"""

    def processor(logger, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", service)
        return event_dict

    return processor


def setup_logging(service: str = SERVICE_NAME) -> None:
    """初始化 structlog 与标准库 logging"""
    log_format = os.environ.get("SKYTASK_LOG_FORMAT", "dev").strip().lower()
    log_level = resolve_log_level(os.environ.get("SKYTASK_LOG_LEVEL"))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service(service),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
