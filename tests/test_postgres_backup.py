import os
import pytest
from core.models.backup_models import BackupRequest
from core.services.postgres_backup_utility import PostgresDumpCommandBuilder


@pytest.fixture
def request_():
    return BackupRequest(
        host="db.internal",
        database_name="orders",
        user="admin",
        password="secret",
        target_directory="/tmp",
        label="nightly",
        database_engine="PostgreSQL",
    )


@pytest.fixture
def builder():
    return PostgresDumpCommandBuilder()


class TestBuildCommand:
    def test_executable_is_configured_path(self, builder, request_):
        command = builder.build_command(request_, "/opt/pg/bin/pg_dump")
        assert command.executable == "/opt/pg/bin/pg_dump"

    def test_argument_order(self, builder, request_):
        command = builder.build_command(request_, "pg_dump")
        dest = f"/tmp{os.sep}orders.backup"
        assert list(command.arguments) == [
            "-U", "admin", "-h", "db.internal", "-F", "c", "-b", "-v", "-f", dest, "orders",
        ]

    def test_password_only_in_environment(self, builder, request_):
        command = builder.build_command(request_, "pg_dump")
        assert command.environment == {"PGPASSWORD": "secret"}
        assert "secret" not in command.argv

    def test_argv_prepends_executable(self, builder, request_):
        command = builder.build_command(request_, "pg_dump")
        assert command.argv[0] == "pg_dump"
        assert command.argv[1:] == list(command.arguments)

    def test_masked_arguments_are_unchanged(self, builder, request_):
        dest = request_.destination_path
        assert builder.masked_arguments(request_, dest) == builder.build_arguments(request_, dest)
