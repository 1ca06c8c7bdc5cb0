"""Core directory functionality - facets, filtering, pagination and view state."""

import logging
import math
from dataclasses import replace
from typing import Iterable, Sequence

from ..config import DEBOUNCE_SECONDS, ITEMS_PER_PAGE
from ..models import FacetSets, FilterState, Organization
from .debounce import Debouncer

logger = logging.getLogger(__name__)

VIEW_MODES = ("card", "table")


# =============================================================================
# FACETS
# =============================================================================

def index_facets(records: Iterable[Organization]) -> FacetSets:
    """Derive the selectable cities, sectors and registration years.

    Strings are sorted ascending, years descending. Empty values and
    unparseable registration dates contribute nothing.
    """
    cities = set()
    sectors = set()
    years = set()

    for record in records:
        if record.city:
            cities.add(record.city)
        if record.sector:
            sectors.add(record.sector)
        year = record.registration_year
        if year is not None:
            years.add(year)

    return FacetSets(
        cities=sorted(cities),
        sectors=sorted(sectors),
        years=sorted(years, reverse=True),
    )


# =============================================================================
# QUERY ENGINE
# =============================================================================

def matches_filters(record: Organization, filters: FilterState) -> bool:
    """Check a record against every active filter."""
    if filters.name and filters.name.lower() not in record.name.lower():
        return False
    if filters.city and record.city != filters.city:
        return False
    if filters.sector and record.sector != filters.sector:
        return False
    if filters.year and str(record.registration_year) != filters.year:
        return False
    return True


def query(records: Iterable[Organization], filters: FilterState) -> list:
    """Return the records matching ``filters``, in dataset order."""
    return [record for record in records if matches_filters(record, filters)]


# =============================================================================
# PAGER
# =============================================================================

def paginate(matches: Sequence, page: int, page_size: int = ITEMS_PER_PAGE):
    """Slice one page out of a result list.

    Args:
        matches: Full result list
        page: 1-based page number; out-of-range pages give an empty slice
        page_size: Items per page

    Returns:
        Tuple of (page_items, total_pages)
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_pages = math.ceil(len(matches) / page_size)
    if page < 1:
        return [], total_pages

    start = (page - 1) * page_size
    return list(matches[start:start + page_size]), total_pages


# =============================================================================
# DIRECTORY VIEW
# =============================================================================

class DirectoryView:
    """Filter, page and view-mode state for one directory session.

    The name filter reaches the query only after it has been stable for the
    debounce window. Any filter change, and any settled name, returns the
    view to page 1.
    """

    def __init__(self, records: Iterable[Organization],
                 page_size: int = ITEMS_PER_PAGE,
                 debounce_seconds: float = DEBOUNCE_SECONDS,
                 scheduler=None):
        self.records = tuple(records)
        self.page_size = page_size
        self.facets = index_facets(self.records)
        self.filters = FilterState()
        self.debounced_name = ""
        self.current_page = 1
        self.view_mode = "card"
        self._debouncer = Debouncer(debounce_seconds, self._on_name_settled, scheduler)
        self._matches = list(self.records)

    def set_filter(self, field: str, value: str) -> None:
        """Apply user input to one filter field."""
        self.filters = self.filters.with_field(field, value)
        self.current_page = 1
        if field == "name":
            self._debouncer.push(value)
        else:
            self._refresh()

    def settle(self) -> None:
        """Apply a pending name change immediately."""
        self._debouncer.flush()

    def set_page(self, page: int) -> None:
        self.current_page = page

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self.view_mode = mode

    @property
    def name_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def matches(self) -> list:
        return list(self._matches)

    @property
    def page_items(self) -> list:
        items, _ = paginate(self._matches, self.current_page, self.page_size)
        return items

    @property
    def total_pages(self) -> int:
        _, total = paginate(self._matches, self.current_page, self.page_size)
        return total

    @property
    def summary(self) -> str:
        total = len(self._matches)
        return (f"Showing {len(self.page_items)} of {total} "
                f"result{'' if total == 1 else 's'}")

    def _on_name_settled(self, name: str) -> None:
        self.debounced_name = name
        self.current_page = 1
        self._refresh()

    def _refresh(self) -> None:
        effective = replace(self.filters, name=self.debounced_name)
        self._matches = query(self.records, effective)
        logger.debug(f"Directory query matched {len(self._matches)} of {len(self.records)}")
