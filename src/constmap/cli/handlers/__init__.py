from .generate import handle_generate

__all__ = [
  "handle_generate",
]
