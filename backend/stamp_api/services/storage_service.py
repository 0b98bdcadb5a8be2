from __future__ import annotations

import logging
import time
from typing import Any

import requests

from ..config import Settings
from ..errors import ConfigError, LinkServiceError, LinkTimeoutError, LinkTransportError
from ..schemas import MetadataDocument, PinnedContent


logger = logging.getLogger(__name__)

PIN_FILE_PATH = "/pinning/pinFileToIPFS"
PIN_JSON_PATH = "/pinning/pinJSONToIPFS"

# Pinata does not need the caller's original filename or type.
UPLOAD_FILENAME = "upload.png"
UPLOAD_CONTENT_TYPE = "image/png"

IPFS_PREFIX = "ipfs://"


def build_ipfs_url(cid: str, gateway: str = "gateway.pinata.cloud") -> str:
    if cid.startswith(IPFS_PREFIX):
        cid = cid[len(IPFS_PREFIX):]
    gateway = gateway.strip()
    if gateway.startswith("http://") or gateway.startswith("https://"):
        base = gateway.rstrip("/")
    else:
        base = f"https://{gateway.rstrip('/')}"
    return f"{base}/ipfs/{cid}"


def _service_error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or "Unknown error"

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("details") or error.get("reason") or error)
    if error:
        return str(error)
    return response.text or "Unknown error"


class PinataLinker:
    """Pins an image and a metadata document that points at it.

    The two uploads run strictly in order. The metadata document is only sent
    once the image pin returned a content id, and a failure in either phase
    aborts the whole publish. An image pinned before a metadata failure is
    left on Pinata as is.
    """

    def __init__(
        self,
        jwt: str,
        api_url: str = "https://api.pinata.cloud",
        gateway: str = "gateway.pinata.cloud",
        image_timeout: float = 30.0,
        metadata_timeout: float = 10.0,
    ):
        self.jwt = jwt
        self.api_url = api_url.rstrip("/")
        self.gateway = gateway
        self.image_timeout = image_timeout
        self.metadata_timeout = metadata_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PinataLinker":
        return cls(
            jwt=settings.pinata_jwt,
            api_url=settings.pinata_api_url,
            gateway=settings.pinata_gateway,
            image_timeout=settings.image_upload_timeout_seconds,
            metadata_timeout=settings.metadata_upload_timeout_seconds,
        )

    def publish(self, file_bytes: bytes, name: str | None = None, description: str | None = None) -> str:
        if not self.jwt:
            raise ConfigError("PINATA_JWT is not configured.")

        started = time.monotonic()
        image = self.pin_file(file_bytes)
        document = MetadataDocument.for_image(image, name=name, description=description)
        metadata = self.pin_json(document)

        url = build_ipfs_url(metadata.content_id, self.gateway)
        logger.info("publish complete in %dms: %s", _elapsed_ms(started), url)
        return url

    def pin_file(self, file_bytes: bytes) -> PinnedContent:
        logger.info("image upload starting: %d bytes", len(file_bytes))
        pinned = self._post(
            "image",
            PIN_FILE_PATH,
            timeout=self.image_timeout,
            files={"file": (UPLOAD_FILENAME, file_bytes, UPLOAD_CONTENT_TYPE)},
        )
        logger.info("image pinned: %s", pinned.ipfs_uri)
        return pinned

    def pin_json(self, document: MetadataDocument) -> PinnedContent:
        logger.info("metadata upload starting for %r", document.name)
        pinned = self._post(
            "metadata",
            PIN_JSON_PATH,
            timeout=self.metadata_timeout,
            json=document.model_dump(),
        )
        logger.info("metadata pinned: %s", pinned.ipfs_uri)
        return pinned

    def _post(self, phase: str, path: str, timeout: float, **kwargs: Any) -> PinnedContent:
        started = time.monotonic()
        try:
            response = requests.post(
                f"{self.api_url}{path}",
                headers={"Authorization": f"Bearer {self.jwt}"},
                timeout=timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            logger.error("%s upload timed out after %dms", phase, _elapsed_ms(started))
            raise LinkTimeoutError(phase, f"{phase} upload timed out after {timeout:g}s") from exc
        except requests.RequestException as exc:
            logger.error("%s upload failed after %dms: %s", phase, _elapsed_ms(started), exc)
            raise LinkTransportError(phase, f"{phase} upload failed: {exc}") from exc

        elapsed = _elapsed_ms(started)
        if not response.ok:
            detail = _service_error_message(response)
            logger.error("%s upload rejected by Pinata (%s) after %dms: %s", phase, response.status_code, elapsed, detail)
            raise LinkServiceError(
                phase,
                f"{phase} upload failed: Pinata returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("%s upload returned a non-JSON body after %dms", phase, elapsed)
            raise LinkServiceError(phase, f"{phase} upload failed: Pinata returned a non-JSON body", response.status_code) from exc

        cid = payload.get("IpfsHash") if isinstance(payload, dict) else None
        if not isinstance(cid, str) or not cid:
            logger.error("%s upload returned no usable IpfsHash after %dms: %r", phase, elapsed, payload)
            raise LinkServiceError(phase, f"{phase} upload failed: Pinata response missing IpfsHash", response.status_code)

        logger.info("%s upload completed in %dms", phase, elapsed)
        return PinnedContent(content_id=cid)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
