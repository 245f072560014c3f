"""Pytest configuration and shared fixtures for all tests."""

from pathlib import Path

import pytest

SAMPLE_GO_MOD = """\
module example.com/app

go 1.21

require (
	github.com/pkg/errors v0.9.1
	gopkg.in/yaml.v2 v2.4.0
	golang.org/x/sys v0.15.0 // indirect
	github.com/stretchr/testify v1.8.4
	github.com/davecgh/go-spew v1.1.1 // indirect; used by testify
)

require go.uber.org/zap v1.26.0

replace github.com/foo/bar => ../bar

exclude golang.org/x/net v0.0.1
"""


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests."""
    monkeypatch.setenv("TELEMETRY", "false")
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A project directory with the sample go.mod."""
    (tmp_path / "go.mod").write_text(SAMPLE_GO_MOD)
    return tmp_path
