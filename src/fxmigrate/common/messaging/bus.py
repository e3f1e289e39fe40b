from typing import Any, Optional, Union

from fxmigrate.needle import Needle, SemanticPointer
from .protocols import Renderer


class MessageBus:
    def __init__(self, nexus_instance: Needle):
        self._renderer: Optional[Renderer] = None
        self._nexus = nexus_instance

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def _render(
        self, level: str, msg_id: Union[str, SemanticPointer], **kwargs: Any
    ) -> None:
        if not self._renderer:
            return
        self._renderer.render(self.render_to_string(msg_id, **kwargs), level)

    def debug(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)

    def render_to_string(
        self, msg_id: Union[str, SemanticPointer], **kwargs: Any
    ) -> str:
        template = self._nexus.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return f"<formatting_error for '{str(msg_id)}'>"
