"""
Scraper services: citation URL probing and article text extraction.
"""

from .probe import ProbeResult, UrlProbe
from .scraper import PageScraper, ScrapedPage

__all__ = ["UrlProbe", "ProbeResult", "PageScraper", "ScrapedPage"]
