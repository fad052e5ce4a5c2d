"""
Europe PMC open access paper utilities.

This library loads JATS article XML as served by Europe PMC, exposes
accessors for common front-matter fields, and fetches full text and
supplementary files from the Europe PMC REST API.

Usage:
    from europmc import EuroPMCClient, load_paper

    paper = load_paper("data/papers/PMC3213213.xml")
    print(paper.title(), paper.pmid(), paper.keywords())

    with EuroPMCClient() as client:
        paper = client.fetch_full_text("3213213")
        client.fetch_supplementary_files("3213213", output_dir="data/papers")
"""

from .client import (
    EUROPMC_API_URL,
    ClientConfig,
    EuroPMCClient,
    full_text_url,
    supplementary_files_url,
)
from .exceptions import (
    EuroPMCError,
    HTTPError,
    InvalidArgumentError,
    ParseError,
    TransportError,
)
from .paper import (
    ArticleID,
    ArticleMeta,
    ArticleTitleGroup,
    ContribGroup,
    Contributor,
    ContributorName,
    Front,
    JournalMeta,
    JournalTitleGroup,
    KeywordGroup,
    License,
    PaperDocument,
    Permissions,
    format_author,
    load_paper,
    parse_paper,
)

__all__ = [
    "EUROPMC_API_URL",
    "ClientConfig",
    "EuroPMCClient",
    "full_text_url",
    "supplementary_files_url",
    "EuroPMCError",
    "HTTPError",
    "InvalidArgumentError",
    "ParseError",
    "TransportError",
    "ArticleID",
    "ArticleMeta",
    "ArticleTitleGroup",
    "ContribGroup",
    "Contributor",
    "ContributorName",
    "Front",
    "JournalMeta",
    "JournalTitleGroup",
    "KeywordGroup",
    "License",
    "PaperDocument",
    "Permissions",
    "format_author",
    "load_paper",
    "parse_paper",
]
