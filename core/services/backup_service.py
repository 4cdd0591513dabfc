import asyncio
import logging
from concurrent.futures import Future
from typing import Optional

from core.config.settings import DumpToolSettings
from core.helpers.progress_reporter import ProgressReporter, ProgressSink
from core.helpers.request_validator import validate_request
from core.models.backup_models import BackupOutcome, BackupRequest
from core.services.backup_executor import BackupExecutor

logger = logging.getLogger(__name__)


class BackupService:
    """Validator, executor and reporter wired together for one attempt per call."""

    def __init__(
        self,
        settings: Optional[DumpToolSettings] = None,
        executor: Optional[BackupExecutor] = None,
    ) -> None:
        self.executor = executor or BackupExecutor(settings)

    def _prepare(
        self,
        reporter: ProgressReporter,
        host: Optional[str],
        user: Optional[str],
        password: Optional[str],
        database_name: Optional[str],
        file_path: Optional[str],
        label: Optional[str],
        database_engine: Optional[str],
    ) -> BackupRequest | BackupOutcome:
        result = validate_request(
            reporter,
            host=host,
            database_name=database_name,
            user=user,
            password=password,
            target_directory=file_path,
            label=label,
            database_engine=database_engine,
        )
        if isinstance(result, BackupOutcome):
            logger.info("Backup request rejected: %s", result.message)
        return result

    def perform_backup_pipeline(
        self,
        host: Optional[str],
        user: Optional[str],
        password: Optional[str],
        database_name: Optional[str],
        file_path: Optional[str],
        label: Optional[str],
        database_engine: Optional[str],
        on_progress: Optional[ProgressSink] = None,
    ) -> BackupOutcome:
        reporter = ProgressReporter(on_progress)
        request = self._prepare(
            reporter, host, user, password, database_name, file_path, label, database_engine
        )
        if isinstance(request, BackupOutcome):
            return request
        return self.executor.run(request, reporter)

    def start_backup_pipeline(
        self,
        host: Optional[str],
        user: Optional[str],
        password: Optional[str],
        database_name: Optional[str],
        file_path: Optional[str],
        label: Optional[str],
        database_engine: Optional[str],
        on_progress: Optional[ProgressSink] = None,
    ) -> "Future[BackupOutcome]":
        """Validate on the calling thread, then hand the run to a worker thread.

        Validation failures come back as an already-completed future so the
        caller handles every outcome the same way.
        """
        reporter = ProgressReporter(on_progress)
        request = self._prepare(
            reporter, host, user, password, database_name, file_path, label, database_engine
        )
        if isinstance(request, BackupOutcome):
            done: Future = Future()
            done.set_result(request)
            return done
        return self.executor.start(request, reporter)

    async def async_perform_backup_pipeline(
        self,
        host: Optional[str],
        user: Optional[str],
        password: Optional[str],
        database_name: Optional[str],
        file_path: Optional[str],
        label: Optional[str],
        database_engine: Optional[str],
        on_progress: Optional[ProgressSink] = None,
    ) -> BackupOutcome:
        return await asyncio.to_thread(
            self.perform_backup_pipeline,
            host, user, password, database_name,
            file_path, label, database_engine,
            on_progress,
        )
