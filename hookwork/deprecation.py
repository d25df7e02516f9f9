"""One-time deprecation notices."""

from __future__ import annotations

import logging
import warnings

logger = logging.getLogger(__name__)


class DeprecationNotice:
    """Emits a DeprecationWarning the first time it fires, then stays quiet until reset."""

    def __init__(self, message: str, *, enabled: bool = True) -> None:
        self.message = message
        self.enabled = enabled
        self._warned = False

    @property
    def warned(self) -> bool:
        return self._warned

    def emit(self, stacklevel: int = 3) -> bool:
        if not self.enabled or self._warned:
            return False
        self._warned = True
        logger.debug("Deprecation notice: %s", self.message)
        warnings.warn(self.message, DeprecationWarning, stacklevel=stacklevel)
        return True

    def reset(self, *, enabled: bool | None = None) -> None:
        self._warned = False
        if enabled is not None:
            self.enabled = enabled


CONTEXT_DEPRECATION = DeprecationNotice("Hook.context is deprecated and will be removed")
