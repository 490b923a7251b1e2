"""
Tests for building and validating the run configuration.
"""

import dataclasses

import pytest

from ingest.pr_export.config import ConfigError, Configuration, build_config


class TestBuildConfig:

    def test_defaults(self):
        cfg = build_config(owner="octo", repo="demo")
        assert cfg == Configuration(owner="octo", repo="demo")
        assert cfg.output == "pr_data.csv"
        assert (cfg.page_size, cfg.max_prs, cfg.timeout) == (30, 100, 30.0)
        assert cfg.token is None
        assert cfg.api_base == "https://api.github.com"

    @pytest.mark.parametrize("owner,repo,missing", [
        (None, "demo", "--owner"),
        ("octo", None, "--repo"),
        ("  ", "demo", "--owner"),
        (None, None, "--owner"),
    ])
    def test_missing_required(self, owner, repo, missing):
        with pytest.raises(ConfigError, match=f"Missing required option {missing}"):
            build_config(owner=owner, repo=repo)

    def test_environment_defaults(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("GITHUB_TIMEOUT", "12")
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")

        cfg = build_config(owner="octo", repo="demo")

        assert cfg.token == "env-token"
        assert cfg.timeout == 12.0
        assert cfg.api_base == "https://ghe.example.com/api/v3"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("GITHUB_TIMEOUT", "12")
        cfg = build_config(owner="octo", repo="demo", token="flag", timeout=3)
        assert (cfg.token, cfg.timeout) == ("flag", 3.0)

    def test_bad_timeout_in_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            build_config(owner="octo", repo="demo")

    @pytest.mark.parametrize("field", ["page_size", "max_prs", "timeout"])
    def test_non_positive_numbers(self, field):
        with pytest.raises(ConfigError):
            build_config(owner="octo", repo="demo", **{field: 0})


class TestConfiguration:

    def test_is_immutable(self):
        cfg = Configuration(owner="octo", repo="demo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.owner = "other"

    def test_validate_returns_self(self):
        cfg = Configuration(owner="octo", repo="demo")
        assert cfg.validate() is cfg
