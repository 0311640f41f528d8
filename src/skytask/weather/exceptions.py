"""Weather 异常体系"""


class WeatherError(Exception):
    """天气服务基础异常（非 2xx 响应、返回格式不符合预期等）"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Args:
            message: 错误描述
            status_code: 天气服务返回的 HTTP 状态码（如有）
        """
        super().__init__(message)
        self.status_code = status_code


class WeatherUnreachableError(WeatherError):
    """天气服务不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, base_url: str, original_error: Exception) -> None:
        """
        Args:
            base_url: 尝试连接的服务地址
            original_error: 原始异常
        """
        super().__init__(f"Weather service unreachable: {base_url} -- {original_error}")
        self.base_url = base_url
        self.original_error = original_error
