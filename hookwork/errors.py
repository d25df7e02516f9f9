"""Exception hierarchy for hook registration and dispatch."""

from __future__ import annotations


class HookError(Exception):
    """Base class for every error raised by hookwork."""


class InvalidTapOptionsError(HookError, TypeError):
    pass


class MissingTapNameError(HookError, ValueError):
    pass


class InvalidInterceptorError(HookError, TypeError):
    pass


class AbstractCompileError(HookError, NotImplementedError):
    """Raised when a hook is invoked without a compiler to build its invoker."""


class UnsupportedTapError(HookError):
    pass
