import pytest

from fxmigrate.engine import run_middlewares


def recorder(name, calls):
    def middleware(ctx, next):
        calls.append(f"{name}:before")
        result = next()
        calls.append(f"{name}:after")
        return result

    return middleware


def test_middlewares_wrap_handler_outermost_first():
    calls = []

    def handler(ctx):
        calls.append(f"handler:{ctx}")
        return "done"

    result = run_middlewares(
        [recorder("outer", calls), recorder("inner", calls)], "ctx", handler
    )

    assert result == "done"
    assert calls == [
        "outer:before",
        "inner:before",
        "handler:ctx",
        "inner:after",
        "outer:after",
    ]


def test_no_middlewares_calls_handler_directly():
    assert run_middlewares([], 21, lambda ctx: ctx * 2) == 42


def test_middleware_can_short_circuit():
    def handler(ctx):
        raise AssertionError("handler must not run")

    assert run_middlewares([lambda ctx, next: "cached"], None, handler) == "cached"


def test_exceptions_propagate_through_the_chain():
    seen = []

    def observer(ctx, next):
        try:
            return next()
        except ValueError as e:
            seen.append(str(e))
            raise

    def handler(ctx):
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        run_middlewares([observer], None, handler)
    assert seen == ["boom"]
