import pytest

from hookwork.errors import InvalidTapOptionsError, MissingTapNameError
from hookwork.hook import Hook
from hookwork.models import TapKind


def _noop(*args) -> None:
    return None


def test_with_options_merges_defaults_under_caller_options() -> None:
    hook = Hook(["a"], "compile")
    scoped = hook.with_options({"stage": 5, "plugin": "cache"})

    scoped.tap("A", _noop)
    scoped.tap({"name": "B", "stage": -1}, _noop)

    assert scoped.name == "compile"
    assert [tap.name for tap in hook.taps] == ["B", "A"]
    assert [tap.stage for tap in hook.taps] == [-1, 5]
    assert all(tap.plugin == "cache" for tap in hook.taps)


def test_with_options_stacks_defaults() -> None:
    hook = Hook()
    scoped = hook.with_options({"stage": 1, "plugin": "outer"}).with_options({"plugin": "inner"})

    scoped.tap_async("A", _noop)
    scoped.tap_promise("B", _noop)

    assert scoped.defaults == {"stage": 1, "plugin": "inner"}
    assert [(tap.name, tap.kind, tap.plugin) for tap in hook.taps] == [
        ("A", TapKind.CALLBACK, "inner"),
        ("B", TapKind.DEFERRED, "inner"),
    ]


def test_scoped_view_forwards_intercept_and_is_used() -> None:
    hook = Hook()
    scoped = hook.with_options({"stage": 2})

    assert scoped.is_used() is False
    scoped.intercept({"name": "audit"})

    assert scoped.is_used() is True
    assert hook.interceptors[0].name == "audit"


def test_scoped_view_still_requires_a_name() -> None:
    hook = Hook()
    scoped = hook.with_options({"stage": 2})

    with pytest.raises(MissingTapNameError):
        scoped.tap({"stage": 3}, _noop)
    assert hook.taps == []


def test_scoped_view_rejects_invalid_options() -> None:
    hook = Hook()

    with pytest.raises(InvalidTapOptionsError):
        hook.with_options("not-a-mapping")
    with pytest.raises(InvalidTapOptionsError):
        hook.with_options({}).tap(42, _noop)
