from typing import Optional, Union

from core.helpers.progress_reporter import MISSING_FIELDS_PREFIX, ProgressReporter
from core.models.backup_models import BackupOutcome, BackupRequest, OutcomeKind

REQUIRED_FIELDS = (
    "host",
    "database_name",
    "user",
    "password",
    "target_directory",
    "label",
    "database_engine",
)


def validate_request(
    reporter: ProgressReporter,
    host: Optional[str],
    database_name: Optional[str],
    user: Optional[str],
    password: Optional[str],
    target_directory: Optional[str],
    label: Optional[str],
    database_engine: Optional[str],
) -> Union[BackupRequest, BackupOutcome]:
    """Trim every field and reject the request if any of them ends up empty.

    Returns the trimmed ``BackupRequest``, or a ``VALIDATION_FAILED`` outcome
    after emitting a single diagnostic to ``reporter``.
    """
    raw = {
        "host": host,
        "database_name": database_name,
        "user": user,
        "password": password,
        "target_directory": target_directory,
        "label": label,
        "database_engine": database_engine,
    }
    values = {name: (value or "").strip() for name, value in raw.items()}
    missing = tuple(name for name in REQUIRED_FIELDS if not values[name])

    if missing:
        message = f"{MISSING_FIELDS_PREFIX}{', '.join(missing)}."
        reporter.emit(message)
        return BackupOutcome(
            kind=OutcomeKind.VALIDATION_FAILED,
            message=message,
            missing_fields=missing,
        )

    return BackupRequest(**values)
