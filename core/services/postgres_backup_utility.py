from typing import Dict, List

from core.interfaces.backup_utility_interface import DumpCommandBuilder
from core.models.backup_models import BackupRequest, DatabaseEngine


class PostgresDumpCommandBuilder(DumpCommandBuilder):
    """pg_dump in custom format (``-F c``) with large objects and verbose output.

    The password never appears on the command line; pg_dump reads it from
    ``PGPASSWORD``.
    """

    engine = DatabaseEngine.POSTGRESQL

    def build_arguments(self, request: BackupRequest, destination: str) -> List[str]:
        return [
            "-U", request.user,
            "-h", request.host,
            "-F", "c",
            "-b",
            "-v",
            "-f", destination,
            request.database_name,
        ]

    def build_environment(self, request: BackupRequest) -> Dict[str, str]:
        return {"PGPASSWORD": request.password}
