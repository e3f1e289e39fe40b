from typing import Protocol, Tuple

LEVELS: Tuple[str, ...] = ("debug", "info", "success", "warning", "error")


class Renderer(Protocol):
    """Presents a fully formatted message at one of `LEVELS`."""

    def render(self, message: str, level: str) -> None: ...
