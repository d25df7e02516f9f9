"""Hook registry with deterministic tap ordering and lazily compiled dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from hookwork.compiler import CompileOptions, HookCompiler
from hookwork.deprecation import CONTEXT_DEPRECATION, DeprecationNotice
from hookwork.errors import (
    AbstractCompileError,
    InvalidInterceptorError,
    InvalidTapOptionsError,
    MissingTapNameError,
)
from hookwork.models import Interceptor, Tap, TapKind

if TYPE_CHECKING:
    from hookwork.scoped import ScopedHook

logger = logging.getLogger(__name__)

TapOptions = str | Mapping[str, Any]
Invoker = Callable[..., Any]


class Hook:
    """Ordered tap registry for one event with a fixed list of argument names.

    Invokers are built by the ``compiler`` on first use of each invocation
    kind and cached until a tap or interceptor is added.
    """

    def __init__(
        self,
        args: Sequence[str] = (),
        name: str | None = None,
        *,
        compiler: HookCompiler | None = None,
        context_notice: DeprecationNotice | None = None,
    ) -> None:
        self._args = tuple(args)
        self.name = name
        self.taps: list[Tap] = []
        self.interceptors: list[Interceptor] = []
        self._compiler = compiler
        self._context_notice = context_notice or CONTEXT_DEPRECATION
        self._compiled: dict[TapKind, Invoker | None] = dict.fromkeys(TapKind)

    @property
    def args(self) -> tuple[str, ...]:
        return self._args

    def compile(self, options: CompileOptions) -> Invoker:
        if self._compiler is None:
            raise AbstractCompileError(f"Hook {self.name or '<anonymous>'} has no compiler; it cannot be invoked")
        return self._compiler.compile(options)

    def is_compiled(self, kind: TapKind) -> bool:
        return self._compiled[kind] is not None

    def call(self, *args: Any) -> Any:
        return self._invoker(TapKind.SYNC)(*args)

    def call_async(self, *args: Any) -> Any:
        """Invoke the callback-style invoker; the last positional argument is the completion callback."""
        if not args or not callable(args[-1]):
            raise TypeError("call_async requires a completion callback as its last argument")
        return self._invoker(TapKind.CALLBACK)(*args)

    def promise(self, *args: Any) -> Any:
        return self._invoker(TapKind.DEFERRED)(*args)

    def tap(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._tap(TapKind.SYNC, options, fn)

    def tap_async(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._tap(TapKind.CALLBACK, options, fn)

    def tap_promise(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._tap(TapKind.DEFERRED, options, fn)

    def intercept(self, interceptor: Interceptor | Mapping[str, Any]) -> None:
        if isinstance(interceptor, Interceptor):
            interceptor = interceptor.model_copy()
        elif isinstance(interceptor, Mapping):
            try:
                interceptor = Interceptor.model_validate(dict(interceptor))
            except ValidationError as exc:
                raise InvalidInterceptorError(f"Invalid interceptor: {exc}") from exc
        else:
            raise InvalidInterceptorError("Interceptor must be an Interceptor or a mapping")

        self._reset_compilation()
        self.interceptors.append(interceptor)
        logger.debug("Added interceptor %s to hook %s", interceptor.name or "<anonymous>", self.name)

        if interceptor.register_tap is not None:
            for index, existing in enumerate(self.taps):
                replacement = interceptor.register_tap(existing)
                if replacement is not None:
                    self.taps[index] = replacement

    def with_options(self, defaults: Mapping[str, Any]) -> ScopedHook:
        from hookwork.scoped import ScopedHook

        return ScopedHook(self, defaults)

    def is_used(self) -> bool:
        return bool(self.taps) or bool(self.interceptors)

    def _invoker(self, kind: TapKind) -> Invoker:
        invoker = self._compiled[kind]
        if invoker is None:
            invoker = self._create_call(kind)
            self._compiled[kind] = invoker
        return invoker

    def _create_call(self, kind: TapKind) -> Invoker:
        logger.debug("Compiling %s invoker for hook %s with %s taps", kind.value, self.name, len(self.taps))
        return self.compile(
            CompileOptions(
                taps=tuple(self.taps),
                interceptors=tuple(self.interceptors),
                args=self._args,
                kind=kind,
            )
        )

    def _tap(self, kind: TapKind, options: TapOptions, fn: Callable[..., Any]) -> None:
        if isinstance(options, str):
            options = {"name": options}
        elif not isinstance(options, Mapping):
            raise InvalidTapOptionsError("Invalid tap options")

        name = options.get("name")
        if not isinstance(name, str) or name == "":
            raise MissingTapNameError("Missing name for tap")
        if "context" in options:
            self._context_notice.emit(stacklevel=4)

        try:
            tap = Tap.model_validate({**options, "kind": kind, "fn": fn})
        except ValidationError as exc:
            raise InvalidTapOptionsError(f"Invalid tap options for {name!r}: {exc}") from exc

        tap = self._run_register_interceptors(tap)
        self._insert(tap)
        logger.debug("Registered %s tap %r on hook %s (stage=%s)", kind.value, tap.name, self.name, tap.stage)

    def _run_register_interceptors(self, tap: Tap) -> Tap:
        for interceptor in self.interceptors:
            if interceptor.register_tap is not None:
                replacement = interceptor.register_tap(tap)
                if replacement is not None:
                    tap = replacement
        return tap

    def _reset_compilation(self) -> None:
        self._compiled = dict.fromkeys(TapKind)

    def _insert(self, item: Tap) -> None:
        self._reset_compilation()

        # Resolved greedily against the current order; no global sort.
        before = set(item.before) if item.before else None
        stage = item.stage
        index = len(self.taps)
        while index > 0:
            index -= 1
            existing = self.taps[index]
            if before is not None:
                if existing.name in before:
                    before.discard(existing.name)
                    continue
                if before:
                    continue
            if existing.stage > stage:
                continue
            index += 1
            break
        self.taps.insert(index, item)
