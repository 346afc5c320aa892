"""Tests for environment configuration."""

import psutil
import pytest

from procjson.config import Settings
from procjson.errors import ConfigError
from procjson.scanner import ScanPolicy


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        """Test an empty environment yields the defaults."""
        settings = Settings.from_env({})

        assert settings.port == 8888
        assert settings.host == "0.0.0.0"
        assert settings.log_level == "INFO"
        assert settings.proc_root == psutil.PROCFS_PATH
        assert settings.scan_policy is ScanPolicy.STRICT
        assert settings.scan_workers == 1

    def test_empty_port_uses_default(self):
        """Test an empty PORT is treated as unset."""
        assert Settings.from_env({"PORT": ""}).port == 8888

    def test_port_from_env(self):
        """Test PORT selects the listening port."""
        settings = Settings.from_env({"PORT": "9000", "HOST": "127.0.0.1"})

        assert settings.port == 9000
        assert settings.bind_address == "127.0.0.1:9000"

    @pytest.mark.parametrize("value", ["abc", "0", "65536", "-1"])
    def test_invalid_port(self, value):
        """Test out-of-range or non-numeric ports are rejected."""
        with pytest.raises(ConfigError, match="PORT"):
            Settings.from_env({"PORT": value})

    def test_scan_policy_case_insensitive(self):
        """Test SCAN_POLICY accepts any case."""
        assert Settings.from_env({"SCAN_POLICY": "Partial"}).scan_policy is ScanPolicy.PARTIAL

    def test_invalid_scan_policy(self):
        """Test an unknown SCAN_POLICY is rejected."""
        with pytest.raises(ConfigError, match="SCAN_POLICY"):
            Settings.from_env({"SCAN_POLICY": "lenient"})

    def test_scan_workers(self):
        """Test SCAN_WORKERS sets the reader thread count."""
        assert Settings.from_env({"SCAN_WORKERS": "4"}).scan_workers == 4

    def test_scan_workers_minimum(self):
        """Test SCAN_WORKERS below one is rejected."""
        with pytest.raises(ConfigError, match="SCAN_WORKERS"):
            Settings.from_env({"SCAN_WORKERS": "0"})

    def test_log_level_normalized(self):
        """Test LOG_LEVEL is upper-cased."""
        assert Settings.from_env({"LOG_LEVEL": "debug"}).log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test an unknown LOG_LEVEL is rejected."""
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            Settings.from_env({"LOG_LEVEL": "chatty"})

    def test_proc_root(self):
        """Test PROC_ROOT overrides the procfs mount point."""
        assert Settings.from_env({"PROC_ROOT": "/host/proc"}).proc_root == "/host/proc"

    def test_reads_os_environ_by_default(self, monkeypatch):
        """Test from_env falls back to os.environ."""
        monkeypatch.setenv("PORT", "8123")

        assert Settings.from_env().port == 8123
