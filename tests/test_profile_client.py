"""Unit tests for hlaunch.auth.profile_client."""

import io
import json
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

import pytest

from hlaunch.auth.profile_client import PROFILE_URL, ProfileFetchError, fetch_profile


def _response(payload):
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    response = MagicMock()
    response.__enter__.return_value = io.BytesIO(body)
    response.__exit__.return_value = False
    return response


class TestFetchProfile:
    @patch("hlaunch.auth.profile_client.urlopen")
    def test_returns_profile(self, mock_urlopen):
        mock_urlopen.return_value = _response({"id": "abc", "name": "Steve", "skins": []})

        profile = fetch_profile("tok")

        assert profile.name == "Steve"
        assert profile.id == "abc"

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_sends_bearer_header_to_profile_url(self, mock_urlopen):
        mock_urlopen.return_value = _response({"id": "abc", "name": "Steve"})

        fetch_profile("tok")

        request = mock_urlopen.call_args[0][0]
        assert request.full_url == PROFILE_URL
        assert request.get_method() == "GET"
        assert request.get_header("Authorization") == "Bearer tok"

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_missing_name_is_an_error(self, mock_urlopen):
        mock_urlopen.return_value = _response({"id": "abc"})

        with pytest.raises(ProfileFetchError, match="missing a string 'name' or 'id'"):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_non_string_id_is_an_error(self, mock_urlopen):
        mock_urlopen.return_value = _response({"id": 42, "name": "Steve"})

        with pytest.raises(ProfileFetchError):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_non_object_payload_is_an_error(self, mock_urlopen):
        mock_urlopen.return_value = _response(["Steve"])

        with pytest.raises(ProfileFetchError, match="JSON object"):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_invalid_json_is_an_error(self, mock_urlopen):
        mock_urlopen.return_value = _response(b"<html>")

        with pytest.raises(ProfileFetchError, match="invalid JSON"):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_http_error_includes_status(self, mock_urlopen):
        mock_urlopen.side_effect = HTTPError(PROFILE_URL, 401, "Unauthorized", {}, None)

        with pytest.raises(ProfileFetchError, match="HTTP 401 Unauthorized"):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_network_error(self, mock_urlopen):
        mock_urlopen.side_effect = URLError("no route to host")

        with pytest.raises(ProfileFetchError, match="no route to host"):
            fetch_profile("tok")

    @patch("hlaunch.auth.profile_client.urlopen")
    def test_timeout(self, mock_urlopen):
        mock_urlopen.side_effect = TimeoutError("timed out")

        with pytest.raises(ProfileFetchError, match="timed out"):
            fetch_profile("tok")
