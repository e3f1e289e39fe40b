from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Union

from fxmigrate.common import bus as global_bus
from fxmigrate.needle import SemanticPointer


class SpyBus:
    """A test utility to spy on messages sent via the global bus."""

    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    @contextmanager
    def patch(self, monkeypatch: Any) -> Iterator["SpyBus"]:
        """
        Intercept the shared bus instance. Every module imports the same
        singleton, so patching it once captures all messages.
        """
        original_render = global_bus._render

        def _spy_render(
            level: str, msg_id: Union[str, SemanticPointer], **kwargs: Any
        ) -> None:
            self.messages.append({"level": level, "id": str(msg_id), "params": kwargs})
            original_render(level, msg_id, **kwargs)

        monkeypatch.setattr(global_bus, "_render", _spy_render)
        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self.messages

    def ids(self, level: Optional[str] = None) -> List[str]:
        return [
            m["id"] for m in self.messages if level is None or m["level"] == level
        ]

    def assert_id_called(
        self, msg_id: SemanticPointer, level: Optional[str] = None
    ) -> None:
        key = str(msg_id)
        if key not in self.ids(level):
            raise AssertionError(f"Message with ID '{key}' was not sent.")

    def assert_id_not_called(self, msg_id: SemanticPointer) -> None:
        key = str(msg_id)
        if key in self.ids():
            raise AssertionError(f"Message with ID '{key}' was sent unexpectedly.")
