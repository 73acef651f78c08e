"""Crawler modules (HTTP fetch + DOM extraction).

공개 API는 이 파일에서만 export합니다. 엔진 어댑터는 `crawlers.engines`에 있습니다.
"""

from .diagnostics import DiagnosticArtifactSink
from .dom import DomNode, DomQueryEngine
from .extraction import DomExtractionEngine, ExtractionContext, assemble_result
from .fetcher import HttpPageFetcher, PageFetcher
from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client

__all__ = [
    "DiagnosticArtifactSink",
    "DomNode",
    "DomQueryEngine",
    "DomExtractionEngine",
    "ExtractionContext",
    "assemble_result",
    "HttpPageFetcher",
    "PageFetcher",
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
]
