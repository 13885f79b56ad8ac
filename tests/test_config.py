"""
Unit tests for config.py
"""

import os
import tempfile
from unittest import mock

import pytest
import yaml

from remote_db_backup.config import ConfigLoader
from remote_db_backup.errors import ConfigurationError


def write_config(data) -> str:
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.yaml', delete=False
    ) as f:
        if isinstance(data, str):
            f.write(data)
        else:
            yaml.dump(data, f)
        return f.name


class TestConfigLoader:
    """Tests for ConfigLoader class."""

    @pytest.fixture
    def sample_config(self):
        """Sample configuration dictionary."""
        return {
            "utilities": {
                "ssh": "/usr/bin/ssh"
            },
            "defaults": {
                "ssh_user": "backup",
                "remote_path": "~/backups/"
            },
            "compressor": {
                "type": "gzip",
                "level": 6
            },
            "databases": [
                {
                    "type": "mysql",
                    "database_id": "app",
                    "ssh_host": "db1",
                    "name": "app_production",
                    "host": "localhost"
                },
                {
                    "type": "mysql",
                    "database_id": "all",
                    "ssh_host": "db2",
                    "socket": "/var/run/mysqld/mysqld.sock"
                }
            ],
            "logging": {
                "level": "INFO",
                "file": "./logs/backup.log"
            }
        }

    @pytest.fixture
    def config_file(self, sample_config):
        """Create a temporary config file."""
        path = write_config(sample_config)
        yield path
        os.unlink(path)

    def test_load_config(self, config_file):
        """Test loading a valid config file."""
        loader = ConfigLoader(config_file)
        assert loader.config is not None

    def test_file_not_found(self):
        """Test that FileNotFoundError is raised for missing file."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader("/nonexistent/path/config.yaml")

    def test_get_databases(self, config_file):
        """Test getting list of databases."""
        databases = ConfigLoader(config_file).get_databases()
        assert len(databases) == 2
        assert databases[0]["database_id"] == "app"
        assert databases[1]["socket"] == "/var/run/mysqld/mysqld.sock"

    def test_get_defaults(self, config_file):
        defaults = ConfigLoader(config_file).get_defaults()
        assert defaults["ssh_user"] == "backup"
        assert defaults["remote_path"] == "~/backups/"

    def test_get_compressor_settings(self, config_file):
        assert ConfigLoader(config_file).get_compressor_settings() == {
            "type": "gzip", "level": 6
        }

    def test_get_utilities(self, config_file):
        assert ConfigLoader(config_file).get_utilities() == {"ssh": "/usr/bin/ssh"}

    def test_get_logging_settings(self, config_file):
        logging = ConfigLoader(config_file).get_logging_settings()
        assert logging["level"] == "INFO"
        assert logging["file"] == "./logs/backup.log"

    def test_empty_sections(self):
        """Test handling of missing config sections."""
        path = write_config({"databases": []})
        loader = ConfigLoader(path)
        os.unlink(path)

        assert loader.get_databases() == []
        assert loader.get_defaults() == {}
        assert loader.get_compressor_settings() == {}
        assert loader.get_utilities() == {}
        assert loader.get_logging_settings() == {}

    def test_null_sections(self):
        """Test sections present but left empty in YAML."""
        path = write_config("compressor:\ndatabases:\n")
        loader = ConfigLoader(path)
        os.unlink(path)

        assert loader.get_compressor_settings() == {}
        assert loader.get_databases() == []

    def test_empty_file(self):
        path = write_config("")
        loader = ConfigLoader(path)
        os.unlink(path)
        assert loader.config == {}

    def test_top_level_must_be_mapping(self):
        path = write_config("- just\n- a list\n")
        try:
            with pytest.raises(ConfigurationError):
                ConfigLoader(path)
        finally:
            os.unlink(path)

    def test_databases_must_be_list(self):
        path = write_config({"databases": {"type": "mysql"}})
        loader = ConfigLoader(path)
        os.unlink(path)
        with pytest.raises(ConfigurationError):
            loader.get_databases()


class TestEnvironmentVariables:
    """Tests for environment variable resolution."""

    @pytest.fixture
    def env_config_file(self):
        """Create a temporary config file with env vars."""
        path = write_config({
            "databases": [
                {
                    "ssh_host": "${SSH_HOST}",
                    "username": "${DB_USER}",
                    "password": "${DB_PASSWORD}",
                    "skip_tables": ["${SKIP_1}", "${SKIP_2}"]
                }
            ],
            "defaults": {
                "remote_path": "${BACKUP_ROOT}/mysql"
            }
        })
        yield path
        os.unlink(path)

    def test_resolve_env_vars(self, env_config_file):
        """Test environment variables are resolved."""
        with mock.patch.dict(os.environ, {
            "SSH_HOST": "backup.example.com",
            "DB_USER": "dumper",
            "DB_PASSWORD": "secret",
            "SKIP_1": "sessions",
            "SKIP_2": "cache",
            "BACKUP_ROOT": "~/backups"
        }):
            loader = ConfigLoader(env_config_file)
            database = loader.get_databases()[0]
            assert database["ssh_host"] == "backup.example.com"
            assert database["username"] == "dumper"
            assert database["password"] == "secret"
            assert database["skip_tables"] == ["sessions", "cache"]
            assert loader.get_defaults()["remote_path"] == "~/backups/mysql"

    def test_missing_env_var_becomes_empty(self, env_config_file):
        """Test missing environment variables become empty strings."""
        with mock.patch.dict(os.environ, {}, clear=True):
            loader = ConfigLoader(env_config_file)
            database = loader.get_databases()[0]
            assert database["ssh_host"] == ""
            assert database["password"] == ""

    def test_non_string_values_unchanged(self):
        """Test that non-string values are not modified."""
        path = write_config({
            "defaults": {"ssh_port": 2222, "rsyncable": True, "ssh_user": None}
        })
        loader = ConfigLoader(path)
        os.unlink(path)

        defaults = loader.get_defaults()
        assert defaults["ssh_port"] == 2222
        assert defaults["rsyncable"] is True
        assert defaults["ssh_user"] is None
