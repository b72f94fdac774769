"""
Fetcher - Rate-limited page fetching for the three UAE publishers

1. UAE Ministry of Justice (moj.gov.ae): federal legislation, Arabic + English
2. DIFC Laws (difclaws.com): DIFC free zone legislation, English only
3. ADGM Legal Framework (adgm.com/legal-framework): ADGM free zone, English only

All requests go through one HttpClient, so they share the process-wide
rate limiter and the retry/backoff policy. Relative law URLs are joined to
the publisher's base URL.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..config.sources_config import SourcesConfig
from ..schemas.document_contract import LegalZone
from ..utils.http import HttpClient, create_http_client

logger = logging.getLogger(__name__)

# Index links worth following, per publisher
INDEX_LINK_PATTERNS: Dict[LegalZone, re.Pattern] = {
    LegalZone.FEDERAL: re.compile(r'/(?:en|ar)/legislations?/', re.IGNORECASE),
    LegalZone.DIFC: re.compile(r'/(?:laws|regulations|rules)[-/]', re.IGNORECASE),
    LegalZone.ADGM: re.compile(r'/(?:legal-framework|documents)/', re.IGNORECASE),
}


@dataclass
class FetchResult:
    """A fetched page."""
    status: int
    body: str
    content_type: str
    url: str


@dataclass
class IndexLink:
    """A law link found on a publisher's index page."""
    title: str
    url: str


class Fetcher:
    """Fetch index and law pages from the three publishers."""

    def __init__(self, client: Optional[HttpClient] = None):
        self.client = client or create_http_client()
        self.config = SourcesConfig

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.client.close()

    def fetch(self, url: str) -> FetchResult:
        """Fetch an absolute URL. Raises HttpError subclasses on failure."""
        response = self.client.get(url)
        return FetchResult(
            status=response.status_code,
            body=response.text,
            content_type=response.headers.get("content-type", ""),
            url=str(response.url),
        )

    def resolve_url(self, zone: LegalZone, law_url: str) -> str:
        return urljoin(self.config.get_base_url(zone) + "/", law_url)

    def fetch_content(self, zone: LegalZone, law_url: str) -> FetchResult:
        """Fetch one law page of the given zone."""
        full_url = self.resolve_url(zone, law_url)
        logger.info(f"Fetching {zone.value} content: {full_url}")
        return self.fetch(full_url)

    def fetch_index(self, zone: LegalZone) -> FetchResult:
        """Fetch the legislation index page of the given zone."""
        return self.fetch(self.config.get_index_url(zone))

    def fetch_federal_content(self, law_url: str) -> FetchResult:
        return self.fetch_content(LegalZone.FEDERAL, law_url)

    def fetch_difc_content(self, law_url: str) -> FetchResult:
        return self.fetch_content(LegalZone.DIFC, law_url)

    def fetch_adgm_content(self, regulation_url: str) -> FetchResult:
        return self.fetch_content(LegalZone.ADGM, regulation_url)

    def fetch_federal_index(self) -> FetchResult:
        return self.fetch_index(LegalZone.FEDERAL)

    def fetch_difc_index(self) -> FetchResult:
        return self.fetch_index(LegalZone.DIFC)

    def fetch_adgm_index(self) -> FetchResult:
        return self.fetch_index(LegalZone.ADGM)


def extract_index_links(html: str, zone: LegalZone, base_url: Optional[str] = None) -> List[IndexLink]:
    """
    Collect law links from an index page.

    Only links on the publisher's own host whose path looks like a law page
    are kept; duplicates (by absolute URL) are dropped, first title wins.
    """
    base_url = base_url or SourcesConfig.get_base_url(zone)
    host = urlparse(base_url).netloc
    pattern = INDEX_LINK_PATTERNS[zone]

    soup = BeautifulSoup(html, "html.parser")
    links: List[IndexLink] = []
    seen = set()

    for anchor in soup.find_all("a", href=True):
        url = urljoin(base_url + "/", anchor["href"])
        parsed = urlparse(url)
        if parsed.netloc != host or not pattern.search(parsed.path):
            continue
        title = anchor.get_text(" ", strip=True)
        if not title or url in seen:
            continue
        seen.add(url)
        links.append(IndexLink(title=title, url=url))

    logger.debug(f"Found {len(links)} {zone.value} index links")
    return links


# Module-level convenience functions
_fetcher: Optional[Fetcher] = None


def get_fetcher() -> Fetcher:
    """Get singleton fetcher instance."""
    global _fetcher
    if _fetcher is None:
        _fetcher = Fetcher()
    return _fetcher


def fetch_federal_content(law_url: str) -> FetchResult:
    return get_fetcher().fetch_federal_content(law_url)


def fetch_difc_content(law_url: str) -> FetchResult:
    return get_fetcher().fetch_difc_content(law_url)


def fetch_adgm_content(regulation_url: str) -> FetchResult:
    return get_fetcher().fetch_adgm_content(regulation_url)


def fetch_federal_index() -> FetchResult:
    return get_fetcher().fetch_federal_index()


def fetch_difc_index() -> FetchResult:
    return get_fetcher().fetch_difc_index()


def fetch_adgm_index() -> FetchResult:
    return get_fetcher().fetch_adgm_index()
