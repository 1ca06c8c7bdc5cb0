"""Directory module - browse and filter the organisation directory."""

from .core import DirectoryView, index_facets, matches_filters, paginate, query
from .debounce import Debouncer

__all__ = [
    "DirectoryView",
    "index_facets",
    "matches_filters",
    "paginate",
    "query",
    "Debouncer",
]
