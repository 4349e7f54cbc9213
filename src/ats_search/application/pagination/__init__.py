"""Application pagination – offset page requests and sort criteria."""
from ats_search.application.pagination.page_request import PageRequest, Sort, SortDirection, total_pages

__all__ = ["PageRequest", "Sort", "SortDirection", "total_pages"]
