"""Path search components."""

from ifroute.search.enumerator import (
    PathEnumerator,
    PathSearchResult,
    SearchMode,
    find_internet_paths,
)

__all__ = ["PathEnumerator", "PathSearchResult", "SearchMode", "find_internet_paths"]
