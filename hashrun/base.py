from typing import List, Callable
from dataclasses import dataclass
from types import TracebackType
import logging


class Callback:
    pass


@dataclass
class OnExitCallback(Callback):
    value: Callable[[], None]


@dataclass
class OnFailureCallback(Callback):
    value: Callable[[BaseException], None]


class Scope:
    """
    Runs deferred callbacks in reverse registration order when the block exits.

    Failure callbacks only run when the block raised; the original exception
    always propagates.
    """

    def __init__(self) -> None:
        self.deferred: List[Callback] = []

    def defer(self, fn: Callable[[], None]) -> None:
        self.deferred.append(OnExitCallback(fn))

    def on_failure(self, fn: Callable[[BaseException], None]) -> None:
        self.deferred.append(OnFailureCallback(fn))

    def __enter__(self) -> 'Scope':
        assert len(self.deferred) == 0
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        for fn in self.deferred[::-1]:
            match fn:
                case OnExitCallback(fn):
                    try:
                        fn()
                    except Exception as e:
                        logging.error(f"Error during deferred execution: {e}")
                case OnFailureCallback(fn):
                    if value is None:
                        continue
                    try:
                        fn(value)
                    except Exception as e:
                        logging.error(f"Error during deferred execution: {e}")
