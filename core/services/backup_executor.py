import asyncio
import logging
import os
import subprocess
import threading
from concurrent.futures import Future
from typing import Dict, Optional, Type

from core.config.settings import DumpToolSettings
from core.helpers.progress_reporter import UNSUPPORTED_PREFIX, ProgressReporter
from core.interfaces.backup_utility_interface import DumpCommandBuilder
from core.models.backup_models import (
    BackupCommand,
    BackupOutcome,
    BackupRequest,
    DatabaseEngine,
    OutcomeKind,
)
from core.services.postgres_backup_utility import PostgresDumpCommandBuilder
from core.services.sql_backup_utility import MySQLDumpCommandBuilder

logger = logging.getLogger(__name__)

DUMP_BUILDERS: Dict[DatabaseEngine, Type[DumpCommandBuilder]] = {
    builder.engine: builder
    for builder in (PostgresDumpCommandBuilder, MySQLDumpCommandBuilder)
}


class BackupExecutor:

    class BackupError(Exception):
        pass

    class ProcessLaunchError(BackupError):
        pass

    class ProcessIOError(BackupError):
        pass

    def __init__(self, settings: Optional[DumpToolSettings] = None) -> None:
        self.settings = settings or DumpToolSettings()

    def build_command(self, request: BackupRequest, engine: DatabaseEngine) -> BackupCommand:
        builder = DUMP_BUILDERS[engine]()
        command = builder.build_command(request, self.settings.executable_for(engine))
        logger.debug(
            "Dump command: %s %s",
            command.executable,
            " ".join(builder.masked_arguments(request, request.destination_path)),
        )
        return command

    def _run_process(self, command: BackupCommand, reporter: ProgressReporter) -> int:
        env = os.environ.copy()
        env.update(command.environment)

        try:
            process = subprocess.Popen(
                command.argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=env,
                text=True,
                errors="replace",
                bufsize=1,
            )
        except Exception as e:
            raise self.ProcessLaunchError(str(e)) from e

        with process:
            try:
                for line in process.stdout:
                    reporter.emit(line.rstrip("\r\n"))
            except Exception as e:
                process.kill()
                raise self.ProcessIOError(str(e)) from e
            return process.wait()

    def run(self, request: BackupRequest, reporter: ProgressReporter) -> BackupOutcome:
        """Run one backup attempt to completion on the calling thread.

        Never raises: every failure becomes the returned outcome and a single
        terminal line on ``reporter``.
        """
        reporter.started()

        engine = DatabaseEngine.parse(request.database_engine)
        if engine is None:
            message = f"{UNSUPPORTED_PREFIX}'{request.database_engine}'."
            logger.error(message)
            reporter.emit(message)
            return BackupOutcome(kind=OutcomeKind.UNSUPPORTED_ENGINE, message=message)

        destination = request.destination_path
        logger.info(
            "Backing up %s database '%s' on %s to %s",
            engine.value, request.database_name, request.host, destination,
        )

        try:
            command = self.build_command(request, engine)
            return_code = self._run_process(command, reporter)
        except Exception as e:
            logger.error("Backup of '%s' failed: %s", request.database_name, e)
            reporter.failed(str(e))
            return BackupOutcome(
                kind=OutcomeKind.PROCESS_FAILED,
                message=str(e),
                destination=destination,
            )

        # end of output without an exception counts as success, whatever the exit code
        if return_code != 0:
            logger.warning(
                "%s exited with code %s for '%s'",
                os.path.basename(command.executable), return_code, request.database_name,
            )
        reporter.succeeded()
        return BackupOutcome(
            kind=OutcomeKind.SUCCESS,
            message=f"Backup written to {destination}",
            destination=destination,
            return_code=return_code,
        )

    def start(self, request: BackupRequest, reporter: ProgressReporter) -> "Future[BackupOutcome]":
        """Run the attempt on a worker thread and return immediately."""
        future: Future = Future()

        def _worker() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.run(request, reporter))
            except BaseException as e:
                future.set_exception(e)

        threading.Thread(
            target=_worker,
            name=f"backup-{request.database_name}",
            daemon=True,
        ).start()
        return future

    async def async_run(self, request: BackupRequest, reporter: ProgressReporter) -> BackupOutcome:
        return await asyncio.to_thread(self.run, request, reporter)
