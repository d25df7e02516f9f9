"""Registration facade that pre-merges default tap options."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from hookwork.errors import InvalidTapOptionsError
from hookwork.models import Interceptor

if TYPE_CHECKING:
    from hookwork.hook import Hook, TapOptions


class ScopedHook:
    def __init__(self, hook: Hook, defaults: Mapping[str, Any]) -> None:
        if not isinstance(defaults, Mapping):
            raise InvalidTapOptionsError("Default tap options must be a mapping")
        self._hook = hook
        self._defaults = dict(defaults)

    @property
    def name(self) -> str | None:
        return self._hook.name

    @property
    def defaults(self) -> dict[str, Any]:
        return dict(self._defaults)

    def tap(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._hook.tap(self._merge(options), fn)

    def tap_async(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._hook.tap_async(self._merge(options), fn)

    def tap_promise(self, options: TapOptions, fn: Callable[..., Any]) -> None:
        self._hook.tap_promise(self._merge(options), fn)

    def intercept(self, interceptor: Interceptor | Mapping[str, Any]) -> None:
        self._hook.intercept(interceptor)

    def is_used(self) -> bool:
        return self._hook.is_used()

    def with_options(self, options: TapOptions) -> ScopedHook:
        return ScopedHook(self._hook, self._merge(options))

    def _merge(self, options: TapOptions) -> dict[str, Any]:
        if isinstance(options, str):
            options = {"name": options}
        elif not isinstance(options, Mapping):
            raise InvalidTapOptionsError("Invalid tap options")
        return {**self._defaults, **options}
