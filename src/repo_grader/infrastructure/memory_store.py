"""In-memory analysis store — implements the AnalysisStore port.

Records live for the lifetime of the process.  Once ``max_records`` is
exceeded the oldest insertion is evicted.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from repo_grader.domain.entities import AnalysisRecord

logger = logging.getLogger(__name__)


class InMemoryAnalysisStore:
    """Thread-safe, insertion-ordered map of analysis records."""

    def __init__(self, max_records: int = 1_000) -> None:
        # 0 (or negative) disables eviction.
        self._max_records = max_records
        self._records: OrderedDict[str, AnalysisRecord] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, analysis_id: str) -> AnalysisRecord | None:
        with self._lock:
            return self._records.get(analysis_id)

    def put(self, record: AnalysisRecord) -> None:
        with self._lock:
            if record.id in self._records:
                logger.warning("Overwriting stored analysis %s", record.id)
                self._records.move_to_end(record.id)
            self._records[record.id] = record
            while self._max_records > 0 and len(self._records) > self._max_records:
                evicted, _ = self._records.popitem(last=False)
                logger.debug("Evicted analysis %s", evicted)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
