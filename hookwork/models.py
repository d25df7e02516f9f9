"""Core Pydantic models for taps, interceptors and hook plans."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TapKind(str, Enum):
    SYNC = "sync"
    CALLBACK = "callback"
    DEFERRED = "deferred"


def _normalize_before(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, Iterable):
        value = list(value)
    else:
        return value
    names: list[Any] = []
    for name in value:
        if name not in names:
            names.append(name)
    return names or None


class Tap(BaseModel):
    """One registered callback plus its ordering metadata.

    Unknown registration options are kept as extra fields so interceptors
    and compilers can read them back as attributes.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    kind: TapKind
    fn: Callable[..., Any]
    stage: int = 0
    before: list[str] | None = None
    context: Any = None

    @field_validator("stage", mode="before")
    @classmethod
    def _default_stage(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("before", mode="before")
    @classmethod
    def _dedupe_before(cls, value: Any) -> Any:
        return _normalize_before(value)


RegisterTransform = Callable[[Tap], Tap | None]


class Interceptor(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    register_tap: RegisterTransform | None = Field(default=None, alias="register")
    call: Callable[..., Any] | None = None
    tap: Callable[[Tap], Any] | None = None
    loop: Callable[..., Any] | None = None
    error: Callable[[BaseException], Any] | None = None
    result: Callable[[Any], Any] | None = None
    done: Callable[[], Any] | None = None


class TapPlan(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    kind: TapKind = TapKind.SYNC
    stage: int = 0
    before: list[str] | None = None

    @field_validator("before", mode="before")
    @classmethod
    def _dedupe_before(cls, value: Any) -> Any:
        return _normalize_before(value)

    def to_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"name": self.name, "stage": self.stage}
        if self.before:
            options["before"] = list(self.before)
        return options


class HookPlan(BaseModel):
    """Declarative description of a hook and the taps registered against it."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    args: list[str] = Field(default_factory=list)
    taps: list[TapPlan] = Field(default_factory=list)


DEMO_PLAN = HookPlan(
    name="demo",
    args=["a", "b", "c"],
    taps=[TapPlan(name="A"), TapPlan(name="B", stage=-1)],
)
