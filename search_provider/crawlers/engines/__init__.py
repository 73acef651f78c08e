"""Search engine adapters."""

from .base import DomEngineAdapter, EngineDefinition, SearchEngineAdapter
from .bing import BING
from .duckduckgo import DuckDuckEngineAdapter, DuckDuckResultsParser, DuckDuckTokenExtractor, DuckDuckUrlBuilder
from .duckduckgo_html import DUCKDUCKGO_HTML
from .google import GOOGLE
from .registry import EngineRegistry
from .yahoo import YAHOO

__all__ = [
    "DomEngineAdapter",
    "EngineDefinition",
    "SearchEngineAdapter",
    "EngineRegistry",
    "DuckDuckEngineAdapter",
    "DuckDuckResultsParser",
    "DuckDuckTokenExtractor",
    "DuckDuckUrlBuilder",
    "BING",
    "DUCKDUCKGO_HTML",
    "GOOGLE",
    "YAHOO",
]
