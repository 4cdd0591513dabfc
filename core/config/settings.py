"""Locations of the vendor dump utilities.

Paths are fixed per platform and can be overridden through ``DBDUMPER_*``
environment variables or a ``.env`` file. Nothing is discovered on ``PATH``.
"""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.backup_models import DatabaseEngine

if os.name == "nt":
    DEFAULT_PG_DUMP_PATH = r"C:\Program Files\PostgreSQL\17\bin\pg_dump.exe"
    DEFAULT_MYSQLDUMP_PATH = r"C:\Program Files\MySQL\MySQL Server 8.0\bin\mysqldump.exe"
else:
    DEFAULT_PG_DUMP_PATH = "/usr/bin/pg_dump"
    DEFAULT_MYSQLDUMP_PATH = "/usr/bin/mysqldump"


ENGINE_EXECUTABLE_SETTINGS = {
    DatabaseEngine.POSTGRESQL: "pg_dump_path",
    DatabaseEngine.MYSQL: "mysqldump_path",
}


class DumpToolSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DBDUMPER_",
        env_file=".env",
        extra="ignore",
    )

    pg_dump_path: str = Field(
        DEFAULT_PG_DUMP_PATH, description="Absolute path to the pg_dump executable"
    )
    mysqldump_path: str = Field(
        DEFAULT_MYSQLDUMP_PATH, description="Absolute path to the mysqldump executable"
    )

    def executable_for(self, engine: DatabaseEngine) -> str:
        setting = ENGINE_EXECUTABLE_SETTINGS.get(engine)
        if setting is None:
            raise ValueError(f"No dump executable configured for engine '{engine}'")
        return getattr(self, setting)
