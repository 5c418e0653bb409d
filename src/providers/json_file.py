"""Provider reading the exported ``positions.json`` from disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .base import DataNotAvailable, PositionDataProvider, decode_records

DEFAULT_POSITIONS_PATH = "positions.json"


class JsonFilePositionProvider(PositionDataProvider):
    """Reads trade rows from a JSON array file.

    Expected environment variables:
        * ``POSITIONS_PATH`` - Optional default path of the export file.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or os.getenv("POSITIONS_PATH", DEFAULT_POSITIONS_PATH))

    @property
    def name(self) -> str:
        return "file"

    def load_records(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            raise DataNotAvailable(f"{self.path} not found - export positions first")
        with self.path.open("r", encoding="utf-8") as handle:
            return decode_records(handle.read(), str(self.path))


__all__ = ["DEFAULT_POSITIONS_PATH", "JsonFilePositionProvider"]
