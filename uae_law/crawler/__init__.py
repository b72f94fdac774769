"""Publisher page fetching."""

from .fetcher import (
    FetchResult,
    Fetcher,
    IndexLink,
    extract_index_links,
    fetch_adgm_content,
    fetch_adgm_index,
    fetch_difc_content,
    fetch_difc_index,
    fetch_federal_content,
    fetch_federal_index,
    get_fetcher,
)

__all__ = [
    "FetchResult",
    "Fetcher",
    "IndexLink",
    "extract_index_links",
    "fetch_adgm_content",
    "fetch_adgm_index",
    "fetch_difc_content",
    "fetch_difc_index",
    "fetch_federal_content",
    "fetch_federal_index",
    "get_fetcher",
]
