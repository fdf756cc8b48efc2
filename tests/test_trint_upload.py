"""Unit tests for the Trint upload client."""

import base64
import json
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from trint_batch.errors import TransportError
from trint_batch.trint import client
from trint_batch.trint.client import build_auth_header, build_upload_url
from trint_batch.trint.upload import file_upload


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True


class FakeSession:
    """Records posted requests and replays a canned response or error."""

    def __init__(self, status_code=200, text='{"trintId": "abc123"}', error=None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.calls = []
        self.responses = []

    def post(self, url, data=None, headers=None, timeout=None):
        body = data.read()
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "timeout": timeout,
                "body": body,
                "data_type": type(data),
                "data_closed_during_post": data.closed,
            }
        )
        if self.error is not None:
            raise self.error
        response = FakeResponse(self.status_code, self.text)
        self.responses.append(response)
        return response


@pytest.fixture
def media_file(tmp_path):
    path = tmp_path / "My Interview.mp3"
    path.write_bytes(b"ID3" + b"\x00" * 1021)
    return path


@pytest.fixture
def fake_session(monkeypatch):
    session = FakeSession()
    monkeypatch.setattr("trint_batch.trint.upload.get_session", lambda: session)
    return session


def _upload(path, **kwargs):
    return file_upload(str(path), api_key_id="key-id", api_key_secret="s3cret", **kwargs)


class TestBuildAuthHeader:
    def test_basic_auth(self):
        header = build_auth_header("key-id", "s3cret")
        assert header.startswith("Basic ")
        assert base64.b64decode(header[6:]).decode() == "key-id:s3cret"


class TestBuildUploadUrl:
    """Tests for build_upload_url()."""

    def test_default_server_with_filename(self):
        url = build_upload_url("https://upload.trint.com/", "talk.mp3")
        assert url == "https://upload.trint.com/?filename=talk.mp3"

    def test_filename_is_encoded_before_query_encoding(self):
        """The filename is percent-encoded and then query-encoded again."""
        url = build_upload_url("https://upload.trint.com/", "My Interview.mp3")
        query = parse_qs(urlsplit(url).query)
        assert query["filename"] == ["My%20Interview.mp3"]

    def test_undecodable_filename_bytes_are_percent_encoded(self):
        url = build_upload_url("https://upload.trint.com/", "bad\udcff.mp3")
        assert parse_qs(urlsplit(url).query)["filename"] == ["bad%FF.mp3"]

    def test_language_parameter(self):
        url = build_upload_url("https://upload.trint.com/", "a.mp3", language="fr")
        assert parse_qs(urlsplit(url).query)["language"] == ["fr"]

    def test_keeps_existing_query_and_path(self):
        url = build_upload_url("http://localhost:8080/upload?team=x", "a.mp3")
        parts = urlsplit(url)
        assert parts.netloc == "localhost:8080"
        assert parts.path == "/upload"
        assert parse_qs(parts.query) == {"team": ["x"], "filename": ["a.mp3"]}

    def test_server_without_path(self):
        assert urlsplit(build_upload_url("https://example.com", "a.mp3")).path == "/"


class TestFileUpload:
    """Tests for file_upload()."""

    def test_success(self, media_file, fake_session):
        result = _upload(media_file)
        assert result.success
        assert result.trint_id == "abc123"
        assert result.message == "Upload successful"
        assert result.status_code == 200

    def test_request_headers(self, media_file, fake_session):
        _upload(media_file, language="en-GB")
        call = fake_session.calls[0]
        headers = call["headers"]
        assert headers["Content-Type"] == "audio/mpeg"
        assert headers["Content-Length"] == "1024"
        assert headers["Accept"] == "application/json"
        assert headers["Authorization"] == build_auth_header("key-id", "s3cret")
        query = parse_qs(urlsplit(call["url"]).query)
        assert query["language"] == ["en-GB"]
        assert query["filename"] == ["My%20Interview.mp3"]

    def test_body_is_streamed_from_open_file(self, media_file, fake_session):
        """The body is passed as an open file handle, not pre-read bytes."""
        _upload(media_file)
        call = fake_session.calls[0]
        assert call["data_type"] is not bytes
        assert not call["data_closed_during_post"]
        assert call["body"] == media_file.read_bytes()

    def test_uses_custom_server_and_timeout(self, media_file, fake_session):
        _upload(media_file, upload_server="http://localhost:9000/", timeout=30)
        call = fake_session.calls[0]
        assert call["url"].startswith("http://localhost:9000/?")
        assert call["timeout"] == 30

    def test_response_is_closed(self, media_file, fake_session):
        _upload(media_file)
        assert fake_session.responses[0].closed

    def test_non_2xx_is_failed_outcome(self, media_file, fake_session):
        fake_session.status_code = 401
        fake_session.text = "Unauthorized"
        result = _upload(media_file)
        assert not result.success
        assert result.status_code == 401
        assert result.message == "Upload failed with status 401: Unauthorized"

    def test_2xx_with_invalid_json_is_failed_outcome(self, media_file, fake_session):
        fake_session.text = "<html>ok</html>"
        result = _upload(media_file)
        assert not result.success
        assert result.status_code == 200
        assert result.message

    @pytest.mark.parametrize("body", [{}, {"trintId": ""}, {"trintId": None}, ["abc"]])
    def test_2xx_without_trint_id_is_failed_outcome(self, media_file, fake_session, body):
        fake_session.status_code = 201
        fake_session.text = json.dumps(body)
        result = _upload(media_file)
        assert not result.success
        assert result.status_code == 201
        assert result.message == "Bad response: missing trintId"

    def test_network_error_raises_transport_error(self, media_file, fake_session):
        cause = requests.ConnectionError("connection refused")
        fake_session.error = cause
        with pytest.raises(TransportError) as exc_info:
            _upload(media_file)
        assert exc_info.value.__cause__ is cause
        assert "connection refused" in str(exc_info.value)

    def test_missing_file(self, tmp_path, fake_session):
        with pytest.raises(FileNotFoundError):
            _upload(tmp_path / "missing.mp3")
        assert fake_session.calls == []

    def test_unsupported_file(self, tmp_path, fake_session):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(ValueError):
            _upload(path)
        assert fake_session.calls == []

    def test_debug_logging_does_not_change_result(self, media_file, fake_session):
        result = _upload(media_file, debug=True, upload_id="a1b2c3", language="fr")
        assert result.success


class TestSessions:
    def test_session_is_reused_per_thread(self):
        try:
            assert client.get_session() is client.get_session()
        finally:
            client.reset_sessions()
