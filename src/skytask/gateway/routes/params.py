"""路由参数解析"""

from skytask.core.exceptions import InvalidInputError


def parse_id(value: str | None, name: str) -> int:
    """把路径/查询参数解析为整数 id，失败时抛出 InvalidInputError"""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Valid {name} is required", code="INVALID_ID") from e
