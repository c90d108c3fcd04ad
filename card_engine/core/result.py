"""
定义通用的操作结果对象
"""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass
class OperationResult(Generic[T]):
    """
    通用的操作结果，用于表达"软失败"：预期之内的拒绝不抛异常，而是返回失败结果.

    Attributes:
        success (bool): 操作是否成功
        data (Optional[T]): 成功时附带的数据
        message (Optional[str]): 可读的说明(失败时为原因)
        error_code (Optional[str]): 机器可读的错误代码
    """
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def success_result(cls, data: Optional[T] = None, message: Optional[str] = None, **fields: Any):
        """创建一个表示成功的实例，子类的额外字段通过fields传入"""
        return cls(success=True, data=data, message=message, **fields)

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None, **fields: Any):
        """创建一个表示失败的实例"""
        return cls(success=False, message=message, error_code=error_code, **fields)

    def __bool__(self) -> bool:
        return self.success
