"""Tests for the pkg.go.dev license source."""

from unittest.mock import Mock

import pytest
import requests

from glicense._enrichment.sources.pkggodev import PkgGoDevSource, parse_version
from glicense._resolution.models import Repository
from glicense.http_client import BROWSER_USER_AGENT

MODULE_PAGE = """
<html>
<body>
  <div class="UnitHeader">
    <span class="UnitHeader-detailItem" data-test-id="UnitHeader-version">
      <a href="?tab=versions">
        <span class="UnitHeader-detailItemSubtle">Version: </span>v0.16.0
      </a>
    </span>
    <span class="UnitHeader-detailItem" data-test-id="UnitHeader-licenses">
      <a href="/golang.org/x/sys?tab=licenses">BSD-3-Clause</a>
    </span>
  </div>
  <div class="UnitMeta-repo">
    <a href="https://cs.opensource.google/go/x/sys">cs.opensource.google/go/x/sys</a>
  </div>
</body>
</html>
"""


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def repository():
    return Repository(
        name="golang.org/x/sys",
        version="v0.15.0",
        host="pkg.go.dev",
        url="https://pkg.go.dev/golang.org/x/sys",
    )


def _page_response(text=MODULE_PAGE, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.text = text
    return response


class TestParseVersion:
    """Test extraction of the version from the header text."""

    def test_strips_label(self):
        assert parse_version("Version: v1.2.3") == "v1.2.3"

    def test_drops_trailing_labels(self):
        assert parse_version("Version: v1.2.3 Latest Latest Go to latest") == "v1.2.3"

    def test_empty(self):
        assert parse_version("Version:") == ""


class TestPkgGoDevSourceBasics:
    """Test basic properties of PkgGoDevSource."""

    def test_source_name(self):
        assert PkgGoDevSource().name == "pkg.go.dev"

    def test_supports_pkg_go_dev(self, repository):
        assert PkgGoDevSource().supports(repository) is True

    def test_does_not_support_github(self):
        repo = Repository(name="github.com/a/b", host="github.com", author="a", project="b")
        assert PkgGoDevSource().supports(repo) is False


class TestPkgGoDevSourceFetch:
    """Test page scraping."""

    def test_fetch_extracts_all_fields(self, repository, mock_session):
        mock_session.get.return_value = _page_response()

        assert PkgGoDevSource().fetch(repository, mock_session) is True

        assert repository.version == "v0.15.0 (!new:v0.16.0)"
        assert repository.license == "BSD-3-Clause"
        assert repository.license_style == "bright_yellow"
        assert repository.project == "cs.opensource.google/go/x/sys"
        assert repository.text == ""

    def test_matching_version_is_not_annotated(self, mock_session):
        repo = Repository(name="golang.org/x/sys", version="V0.16.0", host="pkg.go.dev", url="https://pkg.go.dev/x")
        mock_session.get.return_value = _page_response()

        PkgGoDevSource().fetch(repo, mock_session)

        assert repo.version == "V0.16.0"

    def test_unknown_license_gets_default_style(self, repository, mock_session):
        page = MODULE_PAGE.replace("BSD-3-Clause", "Some-Custom-License")
        mock_session.get.return_value = _page_response(page)

        PkgGoDevSource().fetch(repository, mock_session)

        assert repository.license == "Some-Custom-License"
        assert repository.license_style == "yellow"

    def test_license_color_is_case_insensitive(self, repository, mock_session):
        page = MODULE_PAGE.replace("BSD-3-Clause", "mit")
        mock_session.get.return_value = _page_response(page)

        PkgGoDevSource().fetch(repository, mock_session)

        assert repository.license_style == "green"

    def test_request_uses_browser_agent_and_timeout(self, repository, mock_session):
        mock_session.get.return_value = _page_response()

        PkgGoDevSource().fetch(repository, mock_session)

        call = mock_session.get.call_args
        assert call[0][0] == "https://pkg.go.dev/golang.org/x/sys"
        assert call.kwargs["timeout"] == 10
        assert call.kwargs["headers"]["User-Agent"] == BROWSER_USER_AGENT

    def test_page_without_markers(self, repository, mock_session):
        mock_session.get.return_value = _page_response("<html><body>nothing here</body></html>")

        assert PkgGoDevSource().fetch(repository, mock_session) is False

        assert repository.version == "v0.15.0"
        assert repository.license == ""
        assert repository.project == ""

    def test_http_error_is_not_raised(self, repository, mock_session):
        mock_session.get.return_value = _page_response("", status_code=500)

        assert PkgGoDevSource().fetch(repository, mock_session) is False
        assert repository.license == ""

    def test_timeout_is_not_raised(self, repository, mock_session):
        mock_session.get.side_effect = requests.exceptions.Timeout()

        assert PkgGoDevSource().fetch(repository, mock_session) is False
        assert repository.version == "v0.15.0"

    def test_connection_error_is_not_raised(self, repository, mock_session):
        mock_session.get.side_effect = requests.exceptions.ConnectionError("unreachable")
        assert PkgGoDevSource().fetch(repository, mock_session) is False

    def test_page_without_license_counts_as_enriched(self, repository, mock_session):
        page = MODULE_PAGE.replace('data-test-id="UnitHeader-licenses"', 'data-test-id="UnitHeader-other"')
        mock_session.get.return_value = _page_response(page)

        assert PkgGoDevSource().fetch(repository, mock_session) is True

        assert repository.license == ""
        assert repository.version == "v0.15.0 (!new:v0.16.0)"
        assert repository.project == "cs.opensource.google/go/x/sys"
