import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class DatabaseEngine(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"

    @classmethod
    def parse(cls, token: Optional[str]) -> Optional["DatabaseEngine"]:
        """Case-insensitive lookup; unknown or empty tokens give None."""
        if not token:
            return None
        normalized = token.strip().lower()
        for engine in cls:
            if engine.value == normalized:
                return engine
        return None


@dataclass(frozen=True)
class BackupRequest:
    host: str
    database_name: str
    user: str
    password: str = field(repr=False)
    target_directory: str
    label: str
    database_engine: str

    @property
    def destination_path(self) -> str:
        return f"{self.target_directory}{os.sep}{self.database_name}.backup"


@dataclass(frozen=True)
class BackupCommand:
    executable: str
    arguments: Tuple[str, ...]
    environment: Dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    UNSUPPORTED_ENGINE = "unsupported_engine"
    PROCESS_FAILED = "process_failed"


@dataclass(frozen=True)
class BackupOutcome:
    kind: OutcomeKind
    message: str
    missing_fields: Tuple[str, ...] = ()
    destination: Optional[str] = None
    return_code: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS
