import csv
import logging
from pathlib import Path
from typing import Any

from pitcher_clusters.ingest._csv_helpers import clean_header, nullify_empty_strings

logger = logging.getLogger(__name__)


class CsvSource:
    """Reads pitch-level rows from a Statcast / Baseball Savant CSV export."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        logger.debug("Reading CSV %s", self._path)
        encoding = params.pop("encoding", "utf-8")
        # Map pandas-style 'sep' to csv.DictReader 'delimiter'
        delimiter = params.pop("sep", params.pop("delimiter", ","))
        with open(self._path, encoding=encoding, newline="") as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                return []
            reader.fieldnames = clean_header(list(reader.fieldnames))
            rows = [nullify_empty_strings(row) for row in reader]
        logger.debug("Read %d rows from %s", len(rows), self._path)
        return rows
