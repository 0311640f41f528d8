"""SkyTask 异常体系

业务层只抛出以下异常；gateway 负责把它们转换为统一的错误响应体，
client 负责把错误响应还原为同一组异常。
"""


class SkyTaskError(Exception):
    """SkyTask 基础异常"""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        """
        Args:
            message: 人类可读的错误描述
            code: 机器可读错误码，None 使用类默认值
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    @property
    def is_client_error(self) -> bool:
        """是否为调用方引起的错误（4xx）"""
        return 400 <= self.status_code < 500


class InvalidInputError(SkyTaskError):
    """输入缺失或格式错误，修正后重新提交即可恢复"""

    code = "VALIDATION_ERROR"
    status_code = 400


class AuthError(SkyTaskError):
    """凭证错误"""

    code = "INVALID_CREDENTIALS"
    status_code = 401


class NotFoundError(SkyTaskError):
    """引用的记录不存在（删除任务时不使用，删除是幂等的）"""

    code = "NOT_FOUND"
    status_code = 404


class ConflictError(SkyTaskError):
    """唯一性冲突（用户名或邮箱已被占用）"""

    code = "CONFLICT"
    status_code = 409


class TransientServiceError(SkyTaskError):
    """存储层或服务层故障，与调用方输入无关"""

    code = "SERVICE_UNAVAILABLE"
    status_code = 500


_ERRORS_BY_STATUS: dict[int, type[SkyTaskError]] = {
    400: InvalidInputError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(status_code: int, message: str, code: str | None = None) -> SkyTaskError:
    """根据 HTTP 状态码还原异常类型（客户端使用）

    未知的 4xx 归为 InvalidInputError，5xx 及其他归为 TransientServiceError。
    """
    error_cls = _ERRORS_BY_STATUS.get(status_code)
    if error_cls is None:
        error_cls = InvalidInputError if 400 <= status_code < 500 else TransientServiceError
    return error_cls(message, code=code)
