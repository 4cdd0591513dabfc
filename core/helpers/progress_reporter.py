import logging
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

START_MESSAGE = "Starting backup..."
SUCCESS_MESSAGE = "Backup completed successfully!"
FAILURE_PREFIX = "Backup failed: "
UNSUPPORTED_PREFIX = "Unsupported database type: "
MISSING_FIELDS_PREFIX = "Please fill in all required fields: "

ProgressSink = Callable[[str], None]


class ProgressReporter:
    """Append-only transcript of one backup attempt.

    ``sink`` is called once per message, in the order messages arrive. Callers
    bound to a UI loop should marshal inside the sink; the reporter makes no
    assumption about which thread it is called from. A sink that raises is
    logged and does not interrupt the attempt.
    """

    def __init__(self, sink: Optional[ProgressSink] = None) -> None:
        self._sink = sink
        self._lock = threading.Lock()
        # held across append and sink call; reentrant so a sink may emit
        self._emit_lock = threading.RLock()
        self._transcript: List[str] = []

    @property
    def transcript(self) -> List[str]:
        with self._lock:
            return list(self._transcript)

    def emit(self, message: str) -> None:
        with self._emit_lock:
            with self._lock:
                self._transcript.append(message)
            logger.debug("progress: %s", message)
            if self._sink is None:
                return
            try:
                self._sink(message)
            except Exception:
                logger.exception("Progress sink failed on message: %s", message)

    def started(self) -> None:
        self.emit(START_MESSAGE)

    def succeeded(self) -> None:
        self.emit(SUCCESS_MESSAGE)

    def failed(self, reason: str) -> None:
        self.emit(f"{FAILURE_PREFIX}{reason}")
