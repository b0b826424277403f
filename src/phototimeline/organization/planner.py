"""Date-partitioned placement of organized files."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from phototimeline.config.models import DATE_TOKENS

DEFAULT_DATE_FORMAT = "YYYY/MM"
_TOKEN_PATTERN = re.compile("|".join(DATE_TOKENS))


class DatePlacer:
    """Map capture dates to directories below an organized root.

    ``date_format`` is a ``/``-separated list of segments built from the
    ``YYYY``, ``MM`` and ``DD`` tokens; each segment becomes one directory
    level, so ``YYYY/MM`` places a July 2020 photo under ``2020/07``.
    """

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        segments = [segment for segment in date_format.strip("/").split("/") if segment]
        if not segments:
            raise ValueError("date_format must contain at least one segment")
        self.date_format = "/".join(segments)
        self._patterns = [
            _TOKEN_PATTERN.sub(lambda match: DATE_TOKENS[match.group(0)], segment)
            for segment in segments
        ]

    def relative_path(self, created_on: datetime) -> Path:
        return Path(*(created_on.strftime(pattern) for pattern in self._patterns))

    def destination_for(self, root: Path, created_on: datetime) -> Path:
        """Return the directory under ``root`` for a file captured at ``created_on``."""
        return root / self.relative_path(created_on)


__all__ = ["DEFAULT_DATE_FORMAT", "DatePlacer"]
