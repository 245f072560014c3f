"""Tests for report rendering."""

import csv
import io
import json

import pytest

from glicense._resolution.models import Repository
from glicense.exceptions import ConfigurationError
from glicense.report import HEADER_ROW, VALID_FORMATS, render_report


@pytest.fixture
def repositories():
    errors = Repository(
        name="github.com/pkg/errors",
        version="v0.9.1",
        host="github.com",
        author="pkg",
        project="errors",
        url="https://github.com/pkg/errors",
    )
    errors.set_license("MIT", "green")
    sys_repo = Repository(
        name="golang.org/x/sys",
        version="v0.15.0 (!new:v0.16.0)",
        host="pkg.go.dev",
        project="cs.opensource.google/go/x/sys",
        url="https://pkg.go.dev/golang.org/x/sys",
    )
    sys_repo.set_license("BSD-3-Clause", "bright_yellow")
    bare = Repository(name="github.com/onlyowner", version="v1.0.0")
    return [errors, sys_repo, bare]


class TestCsvReport:
    def test_header_and_rows_in_order(self, repositories):
        out = io.StringIO()
        render_report(repositories, "csv", out)

        rows = list(csv.reader(io.StringIO(out.getvalue())))
        assert rows[0] == HEADER_ROW
        assert rows[1] == ["github.com/pkg/errors", "https://github.com/pkg/errors", "MIT", "v0.9.1"]
        assert rows[2] == [
            "golang.org/x/sys",
            "https://pkg.go.dev/golang.org/x/sys",
            "BSD-3-Clause",
            "v0.15.0 (!new:v0.16.0)",
        ]
        assert rows[3] == ["github.com/onlyowner", "", "", "v1.0.0"]
        assert len(rows) == 4

    def test_header_only_once(self, repositories):
        out = io.StringIO()
        render_report(repositories, "csv", out)
        assert out.getvalue().count("Dependency,RepoURL,License,Version") == 1


class TestJsonReport:
    def test_records(self, repositories):
        out = io.StringIO()
        render_report(repositories, "json", out)

        data = json.loads(out.getvalue())
        assert data[0] == {
            "name": "github.com/pkg/errors",
            "url": "https://github.com/pkg/errors",
            "host": "github.com",
            "author": "pkg",
            "project": "errors",
            "license": "MIT",
            "Version": "v0.9.1",
        }
        assert "author" not in data[1]
        assert data[1]["project"] == "cs.opensource.google/go/x/sys"
        assert data[2] == {"name": "github.com/onlyowner", "license": "", "Version": "v1.0.0"}

    def test_license_text_is_not_exported(self, repositories):
        repositories[0].text = "TUlU"
        out = io.StringIO()
        render_report(repositories, "json", out)
        assert "TUlU" not in out.getvalue()


class TestTableReport:
    def test_contains_every_row(self, repositories):
        out = io.StringIO()
        render_report(repositories, "table", out)

        text = out.getvalue()
        for header in HEADER_ROW:
            assert header in text
        assert "github.com/pkg/errors" in text
        assert "https://pkg.go.dev/golang.org/x/sys" in text
        assert "BSD-3-Clause" in text
        assert "v0.15.0 (!new:v0.16.0)" in text

    def test_no_color_codes_when_not_a_terminal(self, repositories):
        out = io.StringIO()
        render_report(repositories, "table", out)
        assert "\x1b[" not in out.getvalue()


class TestRenderReport:
    @pytest.mark.parametrize("fmt", VALID_FORMATS)
    def test_empty_list_writes_nothing(self, fmt):
        out = io.StringIO()
        render_report([], fmt, out)
        assert out.getvalue() == ""

    def test_invalid_format(self, repositories):
        with pytest.raises(ConfigurationError, match="invalid format provided"):
            render_report(repositories, "xml", io.StringIO())
