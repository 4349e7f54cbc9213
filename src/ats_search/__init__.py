"""
ats_search – search and filtering engine for the recruiting pipeline.

Import path convention::

    from ats_search.application.search import SearchEngine, SearchQuery
    from ats_search.adapters.sqlalchemy import SqlAlchemySearchRepository
    from ats_search.kernel.predicate import TextContains, all_of
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
