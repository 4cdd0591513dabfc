from typing import List

from core.interfaces.backup_utility_interface import DumpCommandBuilder
from core.models.backup_models import BackupRequest, DatabaseEngine


class MySQLDumpCommandBuilder(DumpCommandBuilder):

    engine = DatabaseEngine.MYSQL

    def build_arguments(self, request: BackupRequest, destination: str) -> List[str]:
        # no space after -p, otherwise mysqldump prompts for the password
        return [
            f"-u{request.user}",
            f"-p{request.password}",
            "-h", request.host,
            request.database_name,
            f"--result-file={destination}",
        ]

    def masked_arguments(self, request: BackupRequest, destination: str) -> List[str]:
        arguments = self.build_arguments(request, destination)
        arguments[1] = "-p****"
        return arguments
