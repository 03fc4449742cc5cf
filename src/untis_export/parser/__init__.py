"""Parsers turning Untis export files into records."""

from .base import ParseResult, RecordParser
from .untis_html import UntisHtmlParser

__all__ = ["ParseResult", "RecordParser", "UntisHtmlParser"]
