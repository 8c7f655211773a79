#!/usr/bin/env python3
"""
Tests for configuration profiles.
"""

import sys
import os
import json

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

import pytest

from config import Config
from quake_log_tools.parser import PipelineOptions


@pytest.fixture
def dirs(tmp_path):
    profiles = tmp_path / "profiles"
    secrets = tmp_path / "secrets"
    profiles.mkdir()
    secrets.mkdir()
    (profiles / "server1.json").write_text(json.dumps({
        "general": {"log_level": "DEBUG"},
        "parser": {"isolate_failures": True},
        "download": {"timeout": 10}
    }))
    (secrets / "server1_secrets.json").write_text(json.dumps({"download": {"auth_token": "abc"}}))
    return str(profiles), str(secrets)


def test_profile_and_secrets_are_merged(dirs):
    config = Config(config_dir=dirs[0], secrets_dir=dirs[1], profile="server1")

    assert config.get("download.timeout") == 10
    assert config.get("download.auth_token") == "abc"
    assert config.get("general.log_level") == "DEBUG"
    assert config.get("missing.key", "fallback") == "fallback"
    assert PipelineOptions.from_config(config.get()).isolate_failures is True


def test_missing_profile_gives_empty_config(dirs):
    config = Config(config_dir=dirs[0], secrets_dir=dirs[1], profile="nope")
    assert config.get() == {}


def test_list_and_switch_profiles(dirs):
    config = Config(config_dir=dirs[0], secrets_dir=dirs[1])
    assert config.get() == {}
    assert config.list_profiles() == ["server1"]
    assert config.switch_profile("server1") is True
    assert config.get("parser.isolate_failures") is True
    assert config.switch_profile("other") is False


def test_bundled_default_profile():
    config = Config()
    assert config.get("parser.include_unterminated") is False
    assert config.get("general.log_level") == "INFO"


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
