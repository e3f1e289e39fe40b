from .pointer import L, SemanticPointer
from .runtime import Needle
from .loader import Loader, JsonHandler

__all__ = ["L", "SemanticPointer", "Needle", "Loader", "JsonHandler"]
