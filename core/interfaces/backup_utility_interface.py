from abc import ABC, abstractmethod
from typing import Dict, List

from core.models.backup_models import BackupCommand, BackupRequest, DatabaseEngine


class DumpCommandBuilder(ABC):

    engine: DatabaseEngine

    @abstractmethod
    def build_arguments(self, request: BackupRequest, destination: str) -> List[str]:
        pass

    def build_environment(self, request: BackupRequest) -> Dict[str, str]:
        return {}

    def masked_arguments(self, request: BackupRequest, destination: str) -> List[str]:
        """Arguments safe to write to a log."""
        return self.build_arguments(request, destination)

    def build_command(self, request: BackupRequest, executable: str) -> BackupCommand:
        destination = request.destination_path
        return BackupCommand(
            executable=executable,
            arguments=tuple(self.build_arguments(request, destination)),
            environment=self.build_environment(request),
        )
