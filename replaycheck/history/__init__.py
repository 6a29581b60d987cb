"""
History selection.

select_histories picks one source from SelectionConfig and fetches up to
max_histories records from it.
"""

from .fetcher import select_histories, fetch_from_files, fetch_by_ids, fetch_by_query

__all__ = [
    "select_histories",
    "fetch_from_files",
    "fetch_by_ids",
    "fetch_by_query",
]
