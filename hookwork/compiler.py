"""Compile contract between hooks and invocation strategies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from hookwork.models import Interceptor, Tap, TapKind


@dataclass(frozen=True)
class CompileOptions:
    taps: tuple[Tap, ...]
    interceptors: tuple[Interceptor, ...]
    args: tuple[str, ...]
    kind: TapKind


class HookCompiler(Protocol):
    def compile(self, options: CompileOptions) -> Callable[..., Any]: ...
