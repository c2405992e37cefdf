"""Load and persist table dictionaries through a blob store."""

from __future__ import annotations

import logging
from typing import Optional

from ..datasource.base import RowSource
from ..profiler.dictionary import TableDictionary
from ..sampler.random import RandomProvider
from .blob import BlobStore

logger = logging.getLogger(__name__)

OUTPUT_FOLDER = "table_dictionary"
FILE_SUFFIX = ".yaml"


class DictionaryStore:
    """
    Cache of ``TableDictionary`` objects keyed by table name.

    There is no locking: concurrent ``load``/``save`` cycles for the same
    table race and the last ``save`` wins.
    """

    def __init__(
        self,
        blobs: BlobStore,
        folder: str = OUTPUT_FOLDER,
        suffix: str = FILE_SUFFIX,
        source: Optional[RowSource] = None,
        rng: Optional[RandomProvider] = None,
    ) -> None:
        self.blobs = blobs
        self.folder = folder.strip("/")
        self.suffix = suffix
        self._source = source
        self._rng = rng

    def cache_key_for(self, table: str) -> str:
        """Return the blob key a table's dictionary is stored under."""

        name = f"{table}{self.suffix}"
        return f"{self.folder}/{name}" if self.folder else name

    def exists(self, table: str) -> bool:
        return self.blobs.exists(self.cache_key_for(table))

    def load(self, table: str, check_cache: bool = True) -> TableDictionary:
        """
        Return the cached dictionary for ``table`` or a fresh empty one.

        A missing blob is the normal cold-start path and is not an error.
        With ``check_cache`` disabled the cache is ignored entirely.
        """

        dictionary = TableDictionary(table, source=self._source, rng=self._rng)
        key = self.cache_key_for(table)
        if not check_cache or not self.blobs.exists(key):
            logger.info("No cached dictionary for %s", table)
            return dictionary

        dictionary.deserialize(self.blobs.get(key))
        logger.info("Loaded dictionary for %s with %d entries", table, len(dictionary.attributes))
        return dictionary

    def save(self, dictionary: TableDictionary) -> None:
        """Write ``dictionary`` to the blob store, replacing any prior blob."""

        if self.folder:
            self.blobs.ensure_namespace(self.folder)
        key = self.cache_key_for(dictionary.table)
        self.blobs.put(key, dictionary.serialize())
        logger.info("Saved dictionary for %s to %s", dictionary.table, key)
