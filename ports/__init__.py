from .llm import LLMClientPort
from .scrape_backend import ScrapeBackendPort

__all__ = [
    "LLMClientPort",
    "ScrapeBackendPort",
]
