"""Viewport scrolling and terminal frame rendering."""

from .engine import RenderEngine, scroll, status_text
from .frame import FrameBuffer

__all__ = ["FrameBuffer", "RenderEngine", "scroll", "status_text"]
