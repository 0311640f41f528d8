"""模型基类 -- 线上格式为 camelCase，Python 属性为 snake_case"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """接受 camelCase 与 snake_case 两种字段名，序列化时使用 camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """序列化为 JSON 兼容的 camelCase dict"""
        return self.model_dump(mode="json", by_alias=True)
