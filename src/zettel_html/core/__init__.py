"""Configuration of render calls."""

from zettel_html.core.config import ConfigError, RenderConfig, load_config

__all__ = ["ConfigError", "RenderConfig", "load_config"]
