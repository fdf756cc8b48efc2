"""HTTP session and request helpers for the Trint upload server."""

import base64
import threading
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import requests

from trint_batch import __version__

DEFAULT_UPLOAD_SERVER = "https://upload.trint.com/"
USER_AGENT = f"trint-batch-upload/{__version__}"

# Characters left unescaped when the filename is encoded before it goes into the query
_FILENAME_SAFE = "-_.!~*'()"

_local = threading.local()
_sessions: list[requests.Session] = []
_sessions_lock = threading.Lock()


def get_session() -> requests.Session:
    """Get the calling thread's requests session, creating it if needed."""
    session = getattr(_local, "session", None)
    if session is None:
        session = requests.Session()
        session.headers["User-Agent"] = USER_AGENT
        _local.session = session
        with _sessions_lock:
            _sessions.append(session)
    return session


def reset_sessions():
    """Close every session created so far (useful for testing or at shutdown)."""
    with _sessions_lock:
        for session in _sessions:
            session.close()
        _sessions.clear()
    _local.__dict__.pop("session", None)


def build_auth_header(api_key_id: str, api_key_secret: str) -> str:
    """Build the Basic auth header value for an API key pair."""
    token = base64.b64encode(f"{api_key_id}:{api_key_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def build_upload_url(server: str, filename: str, language: str | None = None) -> str:
    """
    Build the upload URL for a file.

    The filename is percent-encoded before being added as a query parameter,
    so the server receives it encoded twice on the wire. Existing query
    parameters on the server URL are kept. Filename bytes that are not valid
    UTF-8 are percent-encoded as-is.

    The query string is built with urlencode, whose quote_plus escaping
    differs slightly from a browser URLSearchParams (e.g. `~` stays literal,
    `*` is escaped). The server decodes both forms to the same value.
    """
    parts = urlsplit(server)
    query = [
        (k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k not in ("filename", "language")
    ]
    query.append(("filename", quote(filename, safe=_FILENAME_SAFE, errors="surrogateescape")))
    if language:
        query.append(("language", language))
    path = parts.path or "/"
    return urlunsplit((parts.scheme, parts.netloc, path, urlencode(query), parts.fragment))
