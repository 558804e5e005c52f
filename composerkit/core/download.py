"""
HTTP download of the Composer bootstrap script.

This module provides a single-shot downloader with:
- HTTP/HTTPS downloads with TLS verification
- Optional proxy routing
- Timeout handling
- Optional checksum verification during download

Every failure (bad proxy URL, transport error, non-2xx status, local write
error, checksum mismatch) is normalized to DownloadError. Downloads are not
retried.
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse

import requests
from requests.exceptions import RequestException

from composerkit.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60


@dataclass(frozen=True)
class DownloadConfig:
    """
    Download options.

    Attributes:
        use_proxy: Route the request through proxy_url
        proxy_url: HTTP proxy URL, only used when use_proxy is set
        timeout_seconds: Request timeout (0 or less means the default, 60s)
    """

    use_proxy: bool = False
    proxy_url: Optional[str] = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def proxies(self) -> Optional[Dict[str, str]]:
        """
        Build the requests proxy mapping.

        Returns:
            Proxy mapping, or None when no proxy is configured

        Raises:
            DownloadError: If the proxy URL is malformed
        """
        if not self.use_proxy or not self.proxy_url:
            return None

        parsed = urlparse(self.proxy_url)
        if not parsed.scheme or not parsed.netloc:
            raise DownloadError(f"Invalid proxy URL: {self.proxy_url!r}")

        return {"http": self.proxy_url, "https": self.proxy_url}

    def timeout(self) -> int:
        return (
            self.timeout_seconds
            if self.timeout_seconds and self.timeout_seconds > 0
            else DEFAULT_TIMEOUT_SECONDS
        )


class StreamingHasher:
    """Compute hash incrementally for streaming downloads."""

    SUPPORTED = ("sha256", "sha384", "sha512")

    def __init__(self, algorithm: str = "sha384"):
        """
        Initialize streaming hasher.

        Args:
            algorithm: Hash algorithm ('sha256', 'sha384', 'sha512')

        Raises:
            ValueError: If algorithm is not supported
        """
        self.algorithm = algorithm.lower()
        if self.algorithm not in self.SUPPORTED:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        self.hasher = hashlib.new(self.algorithm)

    def update(self, data: bytes):
        self.hasher.update(data)

    def finalize(self) -> str:
        return self.hasher.hexdigest()

    def verify(self, expected_hash: str) -> bool:
        """Case-insensitive comparison against an expected hex digest."""
        return self.finalize().lower() == expected_hash.strip().lower()


def download_file(
    url: str,
    destination: Path,
    config: Optional[DownloadConfig] = None,
    expected_sha384: Optional[str] = None,
) -> Path:
    """
    Download file from URL to destination, overwriting it if present.

    Args:
        url: URL to download from
        destination: Local path to save file
        config: Proxy and timeout options
        expected_sha384: Expected SHA-384 hex digest (verified while streaming)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the download fails for any reason
        ValueError: If URL or destination is empty

    Example:
        >>> from composerkit.core.download import download_file, DownloadConfig
        >>> download_file(
        ...     "https://getcomposer.org/installer",
        ...     Path("/tmp/composer-setup.php"),
        ...     DownloadConfig(use_proxy=True, proxy_url="http://proxy:8080"),
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    config = config or DownloadConfig()
    destination = Path(destination)
    proxies = config.proxies()

    logger.info(f"Downloading {url}")
    if proxies:
        logger.debug(f"Using proxy {config.proxy_url}")

    try:
        response = requests.get(
            url,
            stream=True,
            timeout=config.timeout(),
            proxies=proxies,
            allow_redirects=True,
        )
    except RequestException as e:
        raise DownloadError(f"Request to {url} failed: {e}") from e

    with response:
        if not 200 <= response.status_code < 300:
            raise DownloadError(
                f"Server returned status {response.status_code} for {url}"
            )

        hasher = StreamingHasher("sha384") if expected_sha384 else None

        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)
                        if hasher:
                            hasher.update(chunk)
        except RequestException as e:
            raise DownloadError(f"Transfer from {url} failed: {e}") from e
        except OSError as e:
            raise DownloadError(f"Cannot write {destination}: {e}") from e

    if expected_sha384 and hasher:
        if not hasher.verify(expected_sha384):
            actual_hash = hasher.finalize()
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Checksum mismatch for {destination.name}: "
                f"expected {expected_sha384}, got {actual_hash}"
            )
        logger.debug("Checksum verified successfully")

    logger.info(f"Download complete: {destination}")
    return destination


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "DownloadConfig",
    "StreamingHasher",
    "download_file",
]
