"""Saving and loading the filter list as JSON.

The filters file is a JSON array of objects, one per filter, in list order:

    [
      {"pattern": "ERROR", "color": "#ff0000", "highlighted": true, "shown": true},
      {"pattern": "DEBUG", "color": "#888888", "highlighted": false, "shown": false}
    ]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from logfocus.core.errors import FilterFileError, FilterParseError
from logfocus.models.filter_def import LogFilter, StoredFilter

logger = logging.getLogger(__name__)

_FILTER_LIST = TypeAdapter(list[StoredFilter])


class FilterFile:
    """A filters file on disk.

    Example usage:
        filter_file = FilterFile(Path("~/.config/logfocus/filters.json").expanduser())
        filter_file.save(store.list())
        filters = filter_file.load()
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def dumps(self, filters: Sequence[LogFilter]) -> str:
        """Serialize filters to the JSON text written by ``save``."""
        data = [filt.model_dump(mode="json") for filt in filters]
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def save(self, filters: Sequence[LogFilter]) -> None:
        """Write the filters, replacing the file's previous contents.

        Missing parent directories are created.

        Raises:
            FilterFileError: If the file cannot be written.
        """
        content = self.dumps(filters)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise FilterFileError(f"Failed to save filters ({e.strerror or e})", self.path) from e
        logger.debug("Saved %d filters to %s", len(filters), self.path)

    def load(self) -> list[LogFilter]:
        """Read the filters back.

        Returns:
            The filters in file order; an empty list if the file does not exist.

        Raises:
            FilterFileError: If the file exists but cannot be read.
            FilterParseError: If the content is not a valid filter list.
        """
        if not self.path.exists():
            logger.debug("No filters file at %s", self.path)
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FilterFileError(f"Failed to read filters ({e})", self.path) from e

        filters = self.loads(content)
        logger.debug("Loaded %d filters from %s", len(filters), self.path)
        return filters

    def loads(self, content: str) -> list[LogFilter]:
        """Parse filters file content.

        Raises:
            FilterParseError: If the content is not a valid filter list.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise FilterParseError(f"Invalid JSON: {e}", path=self.path) from e

        if not isinstance(data, list):
            raise FilterParseError(
                f"Expected a JSON array of filters, got {type(data).__name__}",
                path=self.path,
            )

        try:
            entries = _FILTER_LIST.validate_python(data)
        except ValidationError as e:
            error = e.errors()[0]
            loc = error.get("loc", ())
            entry_index = loc[0] if loc and isinstance(loc[0], int) else None
            field = ".".join(str(part) for part in loc[1:])
            message = error.get("msg", str(e))
            if field:
                message = f"{field}: {message}"
            raise FilterParseError(message, path=self.path, entry_index=entry_index) from e

        return [entry.to_filter() for entry in entries]
