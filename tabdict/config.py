"""Settings for wiring row sources, randomness and the dictionary cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .datasource import RowSource, create_row_source
from .errors import InvalidInputError
from .sampler.random import NumpyRandom, PythonRandom, RandomProvider, default_provider
from .store.blob import LocalBlobStore
from .store.service import FILE_SUFFIX, OUTPUT_FOLDER, DictionaryStore


@dataclass(frozen=True)
class Settings:
    cache_root: str = "storage"
    folder: str = OUTPUT_FOLDER
    suffix: str = FILE_SUFFIX
    seed: Optional[int] = None
    rng: str = "python"  # python | numpy
    source: Optional[str] = None  # postgres | csv | parquet
    source_ref: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Read settings from a YAML mapping; missing keys keep their defaults."""

        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise InvalidInputError(f"Settings file {path} must contain a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise InvalidInputError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**raw)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    def build_rng(self) -> RandomProvider:
        kind = self.rng.lower()
        if kind == "numpy":
            return NumpyRandom(self.seed)
        if kind == "python":
            return default_provider() if self.seed is None else PythonRandom(self.seed)
        raise InvalidInputError(f"Unsupported random provider: {self.rng}")

    def build_source(self, table: Optional[str] = None) -> Optional[RowSource]:
        if self.source is None:
            return None
        if not self.source_ref:
            raise InvalidInputError("source_ref is required when a source is configured")
        return create_row_source(self.source, self.source_ref, table)

    def build_store(self, source: Optional[RowSource] = None) -> DictionaryStore:
        return DictionaryStore(
            LocalBlobStore(self.cache_root),
            folder=self.folder,
            suffix=self.suffix,
            source=source,
            rng=self.build_rng(),
        )
