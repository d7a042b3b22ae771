"""Extractor Agent package."""

from .fallback import fallback_parse
from .main import EventExtractor, post_process
from .models import ExtractedEvent

__all__ = ["EventExtractor", "ExtractedEvent", "fallback_parse", "post_process"]
