import json
import logging
from pathlib import Path
from typing import Any

from character_rankings.ingest.errors import DatasetLoadError

logger = logging.getLogger(__name__)


class JsonDocumentSource:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "json"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, encoding: str = "utf-8") -> dict[str, Any]:
        logger.debug("Reading JSON %s", self._path)
        try:
            with open(self._path, encoding=encoding) as f:
                document = json.load(f)
        except FileNotFoundError:
            raise DatasetLoadError(self._path, "file not found") from None
        except json.JSONDecodeError as e:
            raise DatasetLoadError(self._path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
        except UnicodeDecodeError as e:
            raise DatasetLoadError(self._path, f"not valid {encoding} text (byte offset {e.start})") from e
        except OSError as e:
            raise DatasetLoadError(self._path, f"cannot read file ({e.strerror or e})") from e
        if not isinstance(document, dict):
            raise DatasetLoadError(self._path, "top-level JSON value must be an object")
        logger.debug("Read %d top-level keys from %s", len(document), self._path)
        return document
