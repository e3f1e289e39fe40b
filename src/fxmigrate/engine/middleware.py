from typing import Any, Callable, Sequence, TypeVar

C = TypeVar("C")

NextFunction = Callable[[], Any]
Middleware = Callable[[C, NextFunction], Any]


def run_middlewares(
    middlewares: Sequence[Middleware], ctx: C, handler: Callable[[C], Any]
) -> Any:
    """
    Run `handler(ctx)` wrapped by `middlewares`, outermost first.

    Each middleware receives the context and a zero-argument `next` callable;
    not calling `next` short-circuits the rest of the chain.
    """

    def dispatch(index: int) -> Any:
        if index >= len(middlewares):
            return handler(ctx)
        return middlewares[index](ctx, lambda: dispatch(index + 1))

    return dispatch(0)
