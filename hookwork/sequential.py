"""Sequential invocation strategy: taps run one after another in registry order."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from hookwork.compiler import CompileOptions
from hookwork.errors import HookError, UnsupportedTapError
from hookwork.models import Interceptor, Tap, TapKind

logger = logging.getLogger(__name__)


def _notify(interceptors: Sequence[Interceptor], capability: str, *args: Any) -> None:
    for interceptor in interceptors:
        callback = getattr(interceptor, capability)
        if callback is not None:
            callback(*args)


def _as_exception(tap: Tap, error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    return HookError(f"Tap {tap.name!r} failed: {error!r}")


class _Continuation:
    """Completion callback handed to callback-style taps; only the first call counts."""

    def __init__(self, tap: Tap, on_settled: Callable[[BaseException | None], None]) -> None:
        self.called = False
        self._tap = tap
        self._on_settled = on_settled

    def __call__(self, error: Any = None, *_: Any) -> None:
        if self.called:
            logger.warning("Tap %r completed more than once; ignoring extra completion", self._tap.name)
            return
        self.called = True
        self._on_settled(None if error is None else _as_exception(self._tap, error))


class _Resume:
    """Settles one asynchronous tap of a callback-style series.

    Completion that arrives before the tap returns is recorded so the caller's
    loop moves on; later completion re-enters the series at ``next_index``.
    """

    def __init__(
        self,
        next_index: int,
        step: Callable[[int], None],
        finish: Callable[[BaseException | None], None],
    ) -> None:
        self._next_index = next_index
        self._step = step
        self._finish = finish
        self._inline = True
        self._completed_inline = False

    def __call__(self, error: BaseException | None) -> None:
        if error is not None:
            self._finish(error)
        elif self._inline:
            self._completed_inline = True
        else:
            self._step(self._next_index)

    def detach(self) -> bool:
        """Stop accepting inline completion; True when the series must wait."""
        self._inline = False
        return not self._completed_inline


class SequentialCompiler:
    def compile(self, options: CompileOptions) -> Callable[..., Any]:
        if options.kind is TapKind.SYNC:
            return self._compile_sync(options.taps, options.interceptors)
        if options.kind is TapKind.CALLBACK:
            return self._compile_callback(options.taps, options.interceptors)
        return self._compile_deferred(options.taps, options.interceptors)

    def _compile_sync(self, taps: tuple[Tap, ...], interceptors: tuple[Interceptor, ...]) -> Callable[..., None]:
        for tap in taps:
            if tap.kind is not TapKind.SYNC:
                raise UnsupportedTapError(
                    f"Tap {tap.name!r} is registered as {tap.kind.value}; it cannot run in a synchronous call"
                )

        def invoke(*args: Any) -> None:
            _notify(interceptors, "call", *args)
            for tap in taps:
                _notify(interceptors, "tap", tap)
                try:
                    tap.fn(*args)
                except Exception as exc:
                    _notify(interceptors, "error", exc)
                    raise
            _notify(interceptors, "done")

        return invoke

    def _compile_deferred(self, taps: tuple[Tap, ...], interceptors: tuple[Interceptor, ...]) -> Callable[..., Any]:
        async def invoke(*args: Any) -> None:
            _notify(interceptors, "call", *args)
            for tap in taps:
                _notify(interceptors, "tap", tap)
                try:
                    if tap.kind is TapKind.SYNC:
                        tap.fn(*args)
                    elif tap.kind is TapKind.CALLBACK:
                        await _await_continuation(tap, args)
                    else:
                        await tap.fn(*args)
                except Exception as exc:
                    _notify(interceptors, "error", exc)
                    raise
            _notify(interceptors, "done")

        return invoke

    def _compile_callback(self, taps: tuple[Tap, ...], interceptors: tuple[Interceptor, ...]) -> Callable[..., None]:
        def invoke(*args: Any) -> None:
            *params, done = args
            _notify(interceptors, "call", *params)

            def finish(error: BaseException | None) -> None:
                if error is not None:
                    _notify(interceptors, "error", error)
                    done(error)
                    return
                _notify(interceptors, "done")
                done(None)

            def step(index: int) -> None:
                while index < len(taps):
                    tap = taps[index]
                    index += 1
                    _notify(interceptors, "tap", tap)
                    if tap.kind is TapKind.SYNC:
                        try:
                            tap.fn(*params)
                        except Exception as exc:
                            finish(exc)
                            return
                        continue

                    resume = _Resume(index, step, finish)
                    continuation = _Continuation(tap, resume)
                    try:
                        if tap.kind is TapKind.CALLBACK:
                            tap.fn(*params, continuation)
                        else:
                            _schedule_deferred(tap, params, continuation)
                    except Exception as exc:
                        if continuation.called:
                            raise
                        continuation(exc)
                        return
                    if resume.detach():
                        return
                finish(None)

            step(0)

        return invoke


async def _await_continuation(tap: Tap, args: tuple[Any, ...]) -> None:
    future = asyncio.get_running_loop().create_future()

    def settled(error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(None)

    tap.fn(*args, _Continuation(tap, settled))
    await future


def _schedule_deferred(tap: Tap, params: Sequence[Any], continuation: _Continuation) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as exc:
        raise UnsupportedTapError(
            f"Tap {tap.name!r} is deferred; callback invocation needs a running event loop"
        ) from exc

    future = asyncio.ensure_future(tap.fn(*params), loop=loop)

    def on_done(task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            continuation(asyncio.CancelledError())
            return
        continuation(task.exception())

    future.add_done_callback(on_done)
