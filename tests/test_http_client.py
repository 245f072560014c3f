"""Tests for http_client module."""

import re
import unittest

import requests

from glicense.http_client import BROWSER_USER_AGENT, DEFAULT_TIMEOUT, USER_AGENT, create_session, get_default_headers


class TestUserAgent(unittest.TestCase):
    """Tests for USER_AGENT constant."""

    def test_user_agent_format(self):
        """Test USER_AGENT has expected format."""
        self.assertTrue(USER_AGENT.startswith("glicense/"))
        self.assertIn("(+https://github.com/ribice/glice)", USER_AGENT)

    def test_user_agent_has_version(self):
        """Test USER_AGENT includes a version."""
        version_part = USER_AGENT.split("/")[1].split(" ")[0]
        version_pattern = r"^\d+\.\d+(\.\d+)?(-[\w.]+)?$"
        self.assertTrue(
            re.match(version_pattern, version_part) is not None or version_part == "unknown",
            f"Version '{version_part}' is neither a valid version pattern nor 'unknown'",
        )

    def test_browser_user_agent(self):
        """Test the page fetch agent looks like a desktop browser."""
        self.assertTrue(BROWSER_USER_AGENT.startswith("Mozilla/5.0"))
        self.assertNotEqual(BROWSER_USER_AGENT, USER_AGENT)


class TestGetDefaultHeaders(unittest.TestCase):
    """Tests for get_default_headers function."""

    def test_default_headers_minimal(self):
        """Test get_default_headers with no arguments."""
        headers = get_default_headers()
        self.assertEqual(headers, {"User-Agent": USER_AGENT})

    def test_default_headers_with_token(self):
        """Test get_default_headers with token."""
        headers = get_default_headers(token="test-token-123")
        self.assertEqual(headers["Authorization"], "Bearer test-token-123")

    def test_default_headers_empty_token(self):
        """Test that an empty token adds no Authorization header."""
        self.assertNotIn("Authorization", get_default_headers(token=""))

    def test_default_headers_with_accept(self):
        """Test get_default_headers with accept."""
        headers = get_default_headers(accept="application/vnd.github+json")
        self.assertEqual(headers["Accept"], "application/vnd.github+json")


class TestCreateSession(unittest.TestCase):
    """Tests for create_session function."""

    def test_session_carries_user_agent(self):
        session = create_session()
        self.assertIsInstance(session, requests.Session)
        self.assertEqual(session.headers["User-Agent"], USER_AGENT)
        session.close()

    def test_session_has_no_credentials(self):
        session = create_session()
        self.assertNotIn("Authorization", session.headers)
        session.close()

    def test_default_timeout(self):
        self.assertEqual(DEFAULT_TIMEOUT, 10)


if __name__ == "__main__":
    unittest.main()
