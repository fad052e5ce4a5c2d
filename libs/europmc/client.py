"""
Europe PMC client for fetching open access papers.

Builds the REST URLs for an article's full text XML and supplementary
files, and fetches them with a single GET each. There is no retry or
caching: every failure is raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from .exceptions import HTTPError, InvalidArgumentError, ParseError, TransportError
from .paper import PaperDocument, parse_paper

logger = logging.getLogger(__name__)

# Base URL for the Europe PMC REST API
EUROPMC_API_URL = "https://www.ebi.ac.uk/europepmc/webservices/rest"


def full_text_url(pmcid: str, base_url: str = EUROPMC_API_URL) -> str:
    """URL of the full text XML for a PMC ID given without its "PMC" prefix."""
    return f"{base_url}/PMC{pmcid}/fullTextXML"


def supplementary_files_url(pmcid: str, base_url: str = EUROPMC_API_URL) -> str:
    """URL of the supplementary files archive for a PMC ID."""
    return f"{base_url}/PMC{pmcid}/supplementaryFiles"


@dataclass
class ClientConfig:
    """Configuration for a Europe PMC client."""

    base_url: str = EUROPMC_API_URL
    timeout: float = 60.0


class EuroPMCClient:
    """
    Client for Europe PMC full text downloads.

    Example usage:
        with EuroPMCClient() as client:
            paper = client.fetch_full_text("3213213")
            print(paper.title())
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize Europe PMC client.

        Args:
            config: Base URL and timeout (default: ClientConfig())
            http_client: Existing httpx client to send requests with. It is
                left open by close(); the caller owns it.
        """
        self.config = config or ClientConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self.config.timeout)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def full_text_url(self, pmcid: str) -> str:
        return full_text_url(pmcid, self.config.base_url)

    def supplementary_files_url(self, pmcid: str) -> str:
        return supplementary_files_url(pmcid, self.config.base_url)

    def _get(self, url: str) -> bytes:
        """
        GET a URL and return the full body.

        The response is streamed inside a context manager so it is
        closed whether or not the status is a success.
        """
        logger.debug(f"GET {url}")
        try:
            with self._client.stream("GET", url) as response:
                body = response.read()
                if not response.is_success:
                    logger.warning(f"GET {url} returned {response.status_code}")
                    raise HTTPError(
                        response.status_code,
                        body.decode("utf-8", errors="replace"),
                    )
                return body
        except httpx.DecodingError as e:
            raise ParseError(f"Cannot decode response from {url}: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    def fetch_full_text(self, pmcid: str) -> PaperDocument:
        """
        Fetch and parse the full text XML for a paper.

        Args:
            pmcid: PMC ID without the "PMC" prefix (e.g. "3213213")

        Returns:
            Parsed PaperDocument

        Raises:
            InvalidArgumentError: If pmcid is empty
            HTTPError: If the API returns a non-success status
            TransportError: If the request fails
            ParseError: If the body is not article XML
        """
        if not pmcid:
            raise InvalidArgumentError("Empty PMCID provided")

        body = self._get(self.full_text_url(pmcid))
        return parse_paper(body)

    def fetch_supplementary_files(
        self,
        pmcid: str,
        output_dir: Path | str,
    ) -> Path:
        """
        Download the supplementary files archive for a paper.

        Args:
            pmcid: PMC ID without the "PMC" prefix
            output_dir: Directory to save the archive in (created if missing)

        Returns:
            Path of the saved zip archive

        Raises:
            InvalidArgumentError: If pmcid is empty
            HTTPError: If the API returns a non-success status
            TransportError: If the request fails
            ParseError: If the compressed response body cannot be decoded
        """
        if not pmcid:
            raise InvalidArgumentError("Empty PMCID provided")

        body = self._get(self.supplementary_files_url(pmcid))

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"PMC{pmcid}_supplementary.zip"
        output_path.write_bytes(body)
        logger.info(f"Saved {len(body)} bytes of supplementary files to {output_path}")
        return output_path
