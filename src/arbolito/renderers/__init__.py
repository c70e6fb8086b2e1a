"""arbolito renderers.

Renderers convert syntax trees into Python source.

Available Renderers:
- SourceRenderer: precedence-aware unparser built from the statement,
  expression, pattern and argument rendering mixins

Thread Safety:
All per-render state lives in a RenderContext local to each render() call.
Safe for concurrent use from multiple threads.

"""

from arbolito.renderers.context import RenderContext
from arbolito.renderers.protocol import SourceRendererProtocol
from arbolito.renderers.source import SourceRenderer

__all__ = ["RenderContext", "SourceRenderer", "SourceRendererProtocol"]
