"""API specification loading: local files, file:// URLs and HTTP(S) URLs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SpecFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 10.0
RETRY_STATUSES: tuple[int, ...] = (500, 502, 503, 504)


def parse_document(raw: str, *, prefer_yaml: bool = False) -> Any:
    """Parse document text as JSON, falling back to YAML.

    YAML is a superset of JSON, so ``prefer_yaml`` skips the JSON attempt.
    """
    if not prefer_yaml:
        try:
            return json.loads(raw)
        except ValueError:
            pass
    return yaml.safe_load(raw)


def load_spec(path: Path, source: str | None = None) -> dict[str, Any]:
    """Load an OpenAPI spec from a file.

    Supports both YAML and JSON formats. ``source`` is the location reported
    in errors and defaults to the file path.

    Raises:
        SpecFetchError: If the file cannot be read or parsed.
    """
    source = source or str(path)
    try:
        raw = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SpecFetchError(f"Failed to read spec file: {e}", source) from e

    try:
        data = parse_document(raw, prefer_yaml=path.suffix.lower() in {".yml", ".yaml"})
    except yaml.YAMLError as e:
        raise SpecFetchError(f"Invalid spec document: {e}", source) from e

    if not isinstance(data, dict):
        raise SpecFetchError("Spec root must be a mapping", source)
    return data


def _create_session() -> requests.Session:
    session = requests.Session()
    retries = Retry(total=3, backoff_factor=0.5, status_forcelist=RETRY_STATUSES)
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _fetch_remote(url: str, timeout: float) -> dict[str, Any]:
    try:
        with _create_session() as session:
            resp = session.get(url, timeout=timeout)
            resp.raise_for_status()
            text = resp.text
    except requests.RequestException as e:
        raise SpecFetchError(f"Failed to fetch API spec: {e}", url) from e

    try:
        data = parse_document(text)
    except yaml.YAMLError as e:
        raise SpecFetchError(f"Failed to parse API spec: {e}", url) from e

    if not isinstance(data, dict):
        raise SpecFetchError("Spec root must be a mapping", url)
    return data


def _file_url_to_path(url: str) -> Path:
    parsed = urlparse(url)
    path_str = url2pathname(parsed.path or "")
    if parsed.netloc and not path_str.startswith(parsed.netloc):
        path_str = parsed.netloc + path_str
    return Path(path_str)


def fetch_spec(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Fetch an API specification and return the parsed document.

    Accepts ``http(s)://`` URLs, ``file://`` URLs and plain filesystem paths.

    Raises:
        SpecFetchError: On any transport or parse failure, carrying the URL.
    """
    logger.info("Fetching API spec from %s", url)
    if url.startswith(("http://", "https://")):
        return _fetch_remote(url, timeout)

    path = _file_url_to_path(url) if url.startswith("file://") else Path(url)
    return load_spec(path, source=url)
