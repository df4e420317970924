#!/usr/bin/env python3
"""Tests for configuration loading."""

import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from burp.config import (
    ClientConfig,
    find_config_file,
    load_config,
    parse_config_line,
    read_config_file,
)
from burp.exceptions import ConfigError


def write_config(tmp_path, text):
    path = tmp_path / "burp.conf"
    path.write_text(text)
    return str(path)


class TestFindConfigFile:
    """Tests for locating burp.conf."""

    def test_xdg_config_home(self, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg")
        monkeypatch.setenv("HOME", "/home/alice")
        assert find_config_file() == "/xdg/burp/burp.conf"

    def test_home_fallback(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", "/home/alice")
        assert find_config_file() == "/home/alice/.config/burp/burp.conf"

    def test_no_location(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.delenv("HOME", raising=False)
        assert find_config_file() is None


class TestParseConfigLine:
    def test_key_value(self):
        assert parse_config_line("  User = alice  \n") == ("User", "alice")

    def test_value_with_equals(self):
        assert parse_config_line("Password = a=b") == ("Password", "a=b")

    def test_comment_and_blank(self):
        assert parse_config_line("# User = alice") is None
        assert parse_config_line("   \n") is None

    def test_bare_key(self):
        assert parse_config_line("Persist") == ("Persist", "")


class TestReadConfigFile:
    """Tests for parsing burp.conf."""

    def test_all_keys(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", "/home/alice")
        monkeypatch.setenv("BURP_DIR", "/data/burp")
        path = write_config(
            tmp_path,
            "# burp settings\n"
            "User = alice\n"
            "Password = hunter2\n"
            "Cookies = ~/.cache/burp/cookies\n"
            "Persist\n"
            "Domain = aur-dev.example.org\n"
            "LogFolder = $BURP_DIR/logs\n"
            "Timeout = 15\n"
            "UploadTimeout = 600\n",
        )

        values = read_config_file(path)

        assert values == {
            "username": "alice",
            "password": "hunter2",
            "cookie_path": "/home/alice/.cache/burp/cookies",
            "persist": True,
            "domain": "aur-dev.example.org",
            "log_folder": "/data/burp/logs",
            "timeout": 15,
            "upload_timeout": 600,
        }

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_config(tmp_path, "Color = always\nUser = alice\n")
        assert read_config_file(path) == {"username": "alice"}

    def test_missing_file(self, tmp_path):
        assert read_config_file(str(tmp_path / "nope.conf")) == {}

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigError):
            read_config_file(str(tmp_path))

    def test_bad_integer(self, tmp_path):
        path = write_config(tmp_path, "Timeout = soon\n")
        with pytest.raises(ConfigError) as exc_info:
            read_config_file(path)
        assert "Timeout" in exc_info.value.message

    def test_located_through_environment(self, tmp_path, monkeypatch):
        (tmp_path / "burp").mkdir()
        (tmp_path / "burp" / "burp.conf").write_text("User = bob\n")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert read_config_file() == {"username": "bob"}


class TestLoadConfig:
    """Tests for merging defaults, file and overrides."""

    def test_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "nope.conf"))
        assert config == ClientConfig()
        assert config.domain == "aur.archlinux.org"
        assert config.category == "1"
        assert config.persist is False

    def test_overrides_win(self, tmp_path):
        path = write_config(tmp_path, "User = alice\nPassword = fromfile\n")

        config = load_config(path, overrides={"username": "bob", "password": None})

        assert config.username == "bob"
        assert config.password == "fromfile"

    def test_persist_from_file_survives_unset_flag(self, tmp_path):
        path = write_config(tmp_path, "Persist\nCookies = /tmp/cookies\n")

        config = load_config(path, overrides={"persist": None})

        assert config.persist is True
        assert config.cookie_path == "/tmp/cookies"

    def test_unknown_override(self):
        config = ClientConfig()
        with pytest.raises(AttributeError):
            config.update({"colour": "always"})
