"""Streaming file upload to the Trint upload server."""

import json
import logging
import os

import requests

from trint_batch.errors import TransportError
from trint_batch.media.mimetype import get_mime_type
from trint_batch.models.upload import UploadOutcome
from trint_batch.trint.client import (
    DEFAULT_UPLOAD_SERVER,
    build_auth_header,
    build_upload_url,
    get_session,
)

logger = logging.getLogger(__name__)


def _parse_response(status_code: int, body: str) -> UploadOutcome:
    if not 200 <= status_code < 300:
        return UploadOutcome(
            success=False,
            message=f"Upload failed with status {status_code}: {body}",
            status_code=status_code,
        )

    try:
        data = json.loads(body)
    except ValueError as e:
        return UploadOutcome(success=False, message=str(e), status_code=status_code)

    trint_id = data.get("trintId") if isinstance(data, dict) else None
    if not trint_id:
        return UploadOutcome(
            success=False,
            message="Bad response: missing trintId",
            status_code=status_code,
        )

    return UploadOutcome(
        success=True,
        trint_id=str(trint_id),
        message="Upload successful",
        status_code=status_code,
    )


def file_upload(
    file_path: str,
    api_key_id: str,
    api_key_secret: str,
    upload_server: str | None = None,
    language: str | None = None,
    upload_id: str | None = None,
    debug: bool = False,
    timeout: float | None = None,
) -> UploadOutcome:
    """
    Upload a file to the Trint upload server.

    The file is streamed as the raw request body; it is never read into
    memory as a whole. A non-2xx response or a 2xx response without a
    ``trintId`` is returned as a failed outcome rather than raised.

    Args:
        file_path: Path of the media file to upload
        api_key_id: Trint API key ID
        api_key_secret: Trint API key secret
        upload_server: Base URL of the upload server (default: upload.trint.com)
        language: Optional transcription language code
        upload_id: Short identifier used to prefix log lines
        debug: Log request and response details
        timeout: Optional request timeout in seconds

    Returns:
        UploadOutcome with the trintId on success

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type is not supported
        TransportError: If the request fails at the network level
    """
    server = upload_server or DEFAULT_UPLOAD_SERVER

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    mime_type = get_mime_type(file_path)
    if not mime_type:
        raise ValueError(f"Unsupported file type: {file_path}")

    file_name = os.path.basename(file_path)
    file_size = os.stat(file_path).st_size
    prefix = f"[{upload_id}] " if upload_id else ""

    if debug:
        logger.debug("%sUploading file: %s", prefix, file_name)
        logger.debug("%sFile size: %d bytes", prefix, file_size)
        logger.debug("%sMIME type: %s", prefix, mime_type)
        logger.debug("%sUpload server: %s", prefix, server)
        if language:
            logger.debug("%sLanguage: %s", prefix, language)

    url = build_upload_url(server, file_name, language)
    headers = {
        "Content-Type": mime_type,
        "Content-Length": str(file_size),
        "Authorization": build_auth_header(api_key_id, api_key_secret),
        "Accept": "application/json",
    }

    if debug:
        redacted = {**headers, "Authorization": f"Basic {api_key_id}:[REDACTED]"}
        logger.debug("%sRequest: POST %s headers=%s", prefix, url, redacted)

    try:
        with open(file_path, "rb") as f:
            with get_session().post(url, data=f, headers=headers, timeout=timeout) as response:
                status_code = response.status_code
                body = response.text
    except requests.RequestException as e:
        if debug:
            logger.debug("%sRequest error: %r", prefix, e)
        raise TransportError(f"Upload request failed: {e}") from e

    if debug:
        logger.debug("%sResponse status: %d", prefix, status_code)
        logger.debug("%sResponse body: %s", prefix, body)

    return _parse_response(status_code, body)
