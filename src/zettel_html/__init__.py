"""zettel_html: lower zettel markup trees into HTML."""

__version__ = "0.1.0"

from zettel_html.api import RenderResult, render_sexpr, render_zjson  # noqa: E402
from zettel_html.core.config import RenderConfig, load_config  # noqa: E402

__all__ = [
    "RenderConfig",
    "RenderResult",
    "__version__",
    "load_config",
    "render_sexpr",
    "render_zjson",
]
