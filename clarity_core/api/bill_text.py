"""
Bill text loading.

The three bill documents (original bill and the two substitutes) are static
text files at fixed relative paths. They are served either over HTTP from
`documents.base_url` or read from disk under `documents.root` when no base
URL is configured.

Loading is all-or-nothing: every document must arrive before any parsing
happens. One failure aborts the load with BillLoadError. There is no retry
at this layer.
"""
import asyncio
import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote, urljoin

import httpx
from rich.console import Console

from clarity_core.exceptions import BillLoadError, ConfigError
from clarity_core.models import BILL_VERSIONS

console = Console()
logger = logging.getLogger(__name__)

API_TIMEOUT: float = 30.0


def document_paths(config: dict[str, Any]) -> dict[str, str]:
    """
    Relative document path for every bill version slot.

    Raises:
        ConfigError: If a version slot has no configured path
    """
    paths = config.get("documents", {}).get("paths", {})
    missing = [version for version in BILL_VERSIONS if not paths.get(version)]
    if missing:
        raise ConfigError(f"No document path configured for: {', '.join(missing)}")
    return {version: paths[version] for version in BILL_VERSIONS}


def document_urls(config: dict[str, Any]) -> dict[str, str]:
    base_url = config["documents"]["base_url"].rstrip("/") + "/"
    return {
        version: urljoin(base_url, quote(path.lstrip("/")))
        for version, path in document_paths(config).items()
    }


async def _fetch_document(http: httpx.AsyncClient, version: str, url: str) -> str:
    try:
        response = await http.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise BillLoadError(f"Failed to fetch {version} bill text from {url}: {e}", version, url) from e
    return response.text


async def fetch_bill_texts_async(
    config: dict[str, Any],
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> dict[str, str]:
    """
    Fetch all bill documents concurrently over HTTP.

    Args:
        config: Configuration dictionary (documents.base_url, documents.paths)
        transport: Optional httpx transport override

    Returns:
        Mapping of version slot to raw text

    Raises:
        BillLoadError: If any document fails; no partial result is returned
    """
    urls = document_urls(config)
    timeout = config["documents"].get("timeout", API_TIMEOUT)

    async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as http:
        results = await asyncio.gather(
            *(_fetch_document(http, version, url) for version, url in urls.items()),
            return_exceptions=True
        )

    texts: dict[str, str] = {}
    for version, result in zip(urls, results):
        if isinstance(result, BaseException):
            logger.error("Bill text load failed for %s: %s", version, result)
            if isinstance(result, BillLoadError):
                raise result
            raise BillLoadError(f"Failed to fetch {version} bill text: {result}", version, urls[version]) from result
        texts[version] = result
    return texts


def read_bill_texts(config: dict[str, Any]) -> dict[str, str]:
    """
    Read all bill documents from disk under documents.root.

    Raises:
        BillLoadError: If any file is missing or unreadable
    """
    root = Path(config["documents"].get("root", "."))
    texts: dict[str, str] = {}
    for version, relative_path in document_paths(config).items():
        path = root / relative_path
        try:
            texts[version] = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Bill text load failed for %s: %s", version, e)
            raise BillLoadError(f"Failed to read {version} bill text from {path}: {e}", version, str(path)) from e
    return texts


def fetch_bill_texts(
    config: dict[str, Any],
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> dict[str, str]:
    """
    Load the raw text of every bill version.

    Uses HTTP when documents.base_url is set, the filesystem otherwise.

    Raises:
        BillLoadError: If any document cannot be loaded
    """
    console.print("\n[bold cyan]Loading bill texts...[/bold cyan]")

    if config["documents"].get("base_url"):
        texts = asyncio.run(fetch_bill_texts_async(config, transport=transport))
    else:
        texts = read_bill_texts(config)

    for version, text in texts.items():
        console.print(f"[green]✓ Loaded {version} ({len(text.splitlines())} lines)[/green]")
    return texts
