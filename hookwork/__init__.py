"""Ordered, interceptable callback hooks with lazily compiled dispatch."""

from .compiler import CompileOptions, HookCompiler
from .deprecation import CONTEXT_DEPRECATION, DeprecationNotice
from .errors import (
    AbstractCompileError,
    HookError,
    InvalidInterceptorError,
    InvalidTapOptionsError,
    MissingTapNameError,
    UnsupportedTapError,
)
from .hook import Hook
from .models import HookPlan, Interceptor, Tap, TapKind, TapPlan
from .scoped import ScopedHook
from .sequential import SequentialCompiler

__all__ = [
    "AbstractCompileError",
    "CONTEXT_DEPRECATION",
    "CompileOptions",
    "DeprecationNotice",
    "Hook",
    "HookCompiler",
    "HookError",
    "HookPlan",
    "Interceptor",
    "InvalidInterceptorError",
    "InvalidTapOptionsError",
    "MissingTapNameError",
    "ScopedHook",
    "SequentialCompiler",
    "Tap",
    "TapKind",
    "TapPlan",
    "UnsupportedTapError",
]
