from __future__ import annotations

import logging
import os
from typing import Any, Dict

import httpx

from .errors import UploadError
from .project_constants import UPLOAD_CREATED_ON, UPLOAD_SHOW_NAME, UPLOAD_URL

log = logging.getLogger(__name__)


def publish(
    image_path: str,
    name: str,
    symbol: str,
    description: str = "",
    twitter: str = "",
    website: str = "",
    *,
    client: httpx.Client,
    url: str = UPLOAD_URL,
) -> str:
    """
    Upload the token image and its descriptive fields, return the metadata URI.

    One request, no retry. Anything other than a 2xx JSON response carrying a
    non-empty ``metadataUri`` string raises UploadError.
    """
    try:
        with open(image_path, "rb") as f:
            image = f.read()
    except OSError as e:
        raise UploadError(f"Cannot read image {image_path}: {e}") from e

    form: Dict[str, str] = {
        "name": name,
        "symbol": symbol,
        "description": description or "",
        "twitter": twitter or "",
        "website": website or "",
        "showName": UPLOAD_SHOW_NAME,
        "createdOn": UPLOAD_CREATED_ON,
    }
    files = {"file": (os.path.basename(image_path), image)}

    log.debug("Uploading %d image bytes to %s", len(image), url)
    try:
        resp = client.post(url, data=form, files=files)
    except httpx.HTTPError as e:
        raise UploadError(f"IPFS upload failed: {e}") from e

    if not resp.is_success:
        raise UploadError(f"IPFS upload failed: {resp.status_code} {resp.reason_phrase}")

    try:
        data: Any = resp.json()
    except ValueError as e:
        raise UploadError(f"IPFS response is not valid JSON: {e}") from e

    uri = data.get("metadataUri") if isinstance(data, dict) else None
    if not isinstance(uri, str) or not uri:
        raise UploadError("IPFS response did not contain a valid metadata URI")
    return uri
