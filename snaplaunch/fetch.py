"""Archive download over HTTPS, streamed straight to disk."""

from __future__ import annotations

import logging
import pathlib
from typing import Dict, Optional

import requests

from snaplaunch.errors import ConfigurationError, FetchError

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def archive_url(owner: str, repo: str, branch: str) -> str:
    return f"https://github.com/{owner}/{repo}/archive/refs/heads/{branch}.zip"


class Fetcher:
    """Single-attempt downloader. No retries: re-run the launcher instead."""

    def __init__(self, timeout_sec: int = 60, require_token: bool = False):
        self.timeout_sec = timeout_sec
        self.require_token = require_token

    @staticmethod
    def _headers(token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/zip, application/octet-stream"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def fetch(self, url: str, dest: pathlib.Path, token: Optional[str] = None) -> pathlib.Path:
        if self.require_token and not token:
            raise ConfigurationError("Access token required for this repository but none was provided")

        log.info("Downloading %s", url)
        try:
            with requests.get(url, headers=self._headers(token), stream=True, timeout=self.timeout_sec) as resp:
                if resp.status_code < 200 or resp.status_code >= 300:
                    reason = resp.reason or "Unknown error"
                    raise FetchError(f"HTTP {resp.status_code}: {reason}", status=resp.status_code)
                dest.parent.mkdir(parents=True, exist_ok=True)
                with dest.open("wb") as f:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except FetchError:
            self._discard(dest)
            raise
        except requests.Timeout as exc:
            self._discard(dest)
            raise FetchError(f"Timed out after {self.timeout_sec}s: {url}") from exc
        except requests.RequestException as exc:
            self._discard(dest)
            status = exc.response.status_code if exc.response is not None else None
            raise FetchError(f"Request failed: {exc}", status=status) from exc
        except OSError as exc:
            self._discard(dest)
            raise FetchError(f"Cannot write archive to {dest}: {exc}") from exc

        log.info("Download complete (%d bytes)", dest.stat().st_size)
        return dest

    @staticmethod
    def _discard(dest: pathlib.Path) -> None:
        try:
            dest.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            log.debug(f"Failed to remove partial archive {dest}", exc_info=True)
