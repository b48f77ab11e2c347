"""Reader for the source chart document, from disk or over HTTP with retries."""

import logging
import os
import time
from typing import Optional

import requests

from chart_sync.domain.errors import PreconditionFailure

logger = logging.getLogger(__name__)


class ChartSourceClient:
    """Fetches the source chart markdown from a local path or a URL."""

    MAX_RETRIES = 5
    RETRY_DELAY_SECONDS = 1
    TIMEOUT_SECONDS = 30

    def __init__(self, token: Optional[str] = None):
        """
        Initialize the source client.

        Args:
            token: GitHub token for private raw URLs. If None, uses GITHUB_TOKEN env var.
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN")

        self.token = token
        self.headers = {
            "Accept": "text/plain",
        }

        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    def read(self, location: str) -> str:
        """
        Read the source document.

        Args:
            location: Filesystem path or http(s) URL

        Returns:
            The document text

        Raises:
            PreconditionFailure: If the document cannot be read
        """
        if location.startswith(("http://", "https://")):
            return self._fetch(location)
        return self._read_file(location)

    def _read_file(self, path: str) -> str:
        directory = os.path.dirname(path)
        if directory and not os.path.isdir(directory):
            raise PreconditionFailure(f"Source directory does not exist: {directory}")
        if not os.path.isfile(path):
            raise PreconditionFailure(f"Source file does not exist: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise PreconditionFailure(f"Cannot read source file {path}: {e}") from e

    def _fetch(self, url: str) -> str:
        for attempt in range(self.MAX_RETRIES):
            try:
                response = requests.get(url, headers=self.headers, timeout=self.TIMEOUT_SECONDS)

                if response.status_code == 200:
                    response.encoding = "utf-8"
                    return response.text

                if response.status_code in (401, 403, 404):
                    raise PreconditionFailure(f"Source URL returned {response.status_code}: {url}")

                response.raise_for_status()
                raise PreconditionFailure(f"Unexpected response {response.status_code} from {url}")

            except requests.exceptions.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.RETRY_DELAY_SECONDS * (2 ** attempt)
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. Retrying in {delay}s...")
                    time.sleep(delay)
                else:
                    raise PreconditionFailure(f"Cannot fetch source {url}: {e}") from e

        raise PreconditionFailure(f"Max retries exceeded fetching {url}")
