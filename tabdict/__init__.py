"""
Table dictionary (tabdict) package.

This package profiles the value frequencies of individual table columns,
caches the resulting dictionaries, and draws weighted-random sample values
that reproduce production distributions for synthetic test data.
"""

from .profiler.dictionary import Entry, TableDictionary
from .store.service import DictionaryStore

__all__ = [
    "Entry",
    "TableDictionary",
    "DictionaryStore",
    "datasource",
    "profiler",
    "sampler",
    "templates",
    "store",
]
