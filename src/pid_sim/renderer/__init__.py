# MIT License (see LICENSE)
"""
Rendering adapters.

    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for headless runs.
    - NullRenderer: No-op renderer.
    - BufferedRenderer: Records frames; trajectory() exports numpy arrays.

The pygame window is in pid_sim.frontend and is optional.
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
