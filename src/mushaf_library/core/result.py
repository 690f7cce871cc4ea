"""Success / Error / Loading result union for callers that render state.

The three variants are independent dataclasses joined by the ``Result`` alias;
helpers are plain functions that dispatch on the variant.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Error:
    exception: BaseException
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", str(self.exception) or "Unknown error")


@dataclass(frozen=True)
class Loading:
    pass


LOADING = Loading()

Result = Union[Success[T], Error, Loading]


def success(data: T) -> Success[T]:
    return Success(data)


def error(exception: BaseException, message: Optional[str] = None) -> Error:
    return Error(exception, message or "")


def is_success(result: Result) -> bool:
    return isinstance(result, Success)


def is_error(result: Result) -> bool:
    return isinstance(result, Error)


def is_loading(result: Result) -> bool:
    return isinstance(result, Loading)


def get_or_none(result: Result[T]) -> Optional[T]:
    return result.data if isinstance(result, Success) else None


def get_or_default(result: Result[T], default: T) -> T:
    return result.data if isinstance(result, Success) else default


def get_or_throw(result: Result[T]) -> T:
    """Return the data, re-raise the wrapped exception, or fail while loading."""
    if isinstance(result, Success):
        return result.data
    if isinstance(result, Error):
        raise result.exception
    raise RuntimeError("Cannot get data while loading")


def map_result(result: Result[T], transform: Callable[[T], R]) -> Result[R]:
    if isinstance(result, Success):
        return Success(transform(result.data))
    return result


def flat_map(result: Result[T], transform: Callable[[T], Result[R]]) -> Result[R]:
    if isinstance(result, Success):
        return transform(result.data)
    return result


def on_success(result: Result[T], action: Callable[[T], None]) -> Result[T]:
    if isinstance(result, Success):
        action(result.data)
    return result


def on_error(result: Result[T], action: Callable[[BaseException], None]) -> Result[T]:
    if isinstance(result, Error):
        action(result.exception)
    return result


def on_loading(result: Result[T], action: Callable[[], None]) -> Result[T]:
    if isinstance(result, Loading):
        action()
    return result


async def run_catching(block: Callable[[], Awaitable[T]]) -> Result[T]:
    """Await ``block()`` and wrap its value, or the exception it raised."""
    try:
        return Success(await block())
    except Exception as e:
        return Error(e)
