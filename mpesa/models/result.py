from typing import Generic, Optional, TypeVar

from mpesa.errors.codes import ErrorCode
from mpesa.errors.exceptions import ResultAccessError

T = TypeVar('T')


class Result(Generic[T]):
    """
    Outcome of a client operation: either a value or an error message with
    its ErrorCode. Check ``success`` before reading ``value`` or ``error``.
    """

    __slots__ = ('_value', '_error', '_code')

    def __init__(self, value: Optional[T] = None, error: Optional[str] = None,
                 code: ErrorCode = ErrorCode.SUCCESS):
        self._value = value
        self._error = error
        self._code = code

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, code: ErrorCode) -> 'Result[T]':
        if code is ErrorCode.SUCCESS:
            raise ValueError('A failed result needs an error code other than SUCCESS')
        return cls(error=error, code=code)

    @property
    def success(self) -> bool:
        return self._code is ErrorCode.SUCCESS

    @property
    def value(self) -> T:
        if not self.success:
            raise ResultAccessError('Cannot access value of failed result')
        return self._value

    @property
    def error(self) -> str:
        if self.success:
            raise ResultAccessError('Cannot access error of successful result')
        return self._error

    @property
    def code(self) -> ErrorCode:
        return self._code

    def __bool__(self):
        return self.success

    def __repr__(self):
        if self.success:
            return f'Result.ok({self._value!r})'
        return f'Result.failure({self._error!r}, {self._code.name})'
