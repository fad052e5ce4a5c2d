"""
Schema and parser for open access article XML from Europe PMC.

The XML follows the JATS (Journal Article Tag Suite) layout:

    <article>
      <front>
        <journal-meta>...</journal-meta>
        <article-meta>...</article-meta>
      </front>
    </article>

Only the front matter is modelled. Every element is optional: a missing
element yields the empty value for its slot rather than an error, and
unknown elements are ignored.

When a singular element such as <article-title> or <license> repeats, the
first one is used. Text fields include the text of nested inline markup
(<italic>, <sub>, ...). Keywords from all <kwd-group> elements are merged
in document order.

Example usage:
    from europmc.paper import format_author, load_paper

    paper = load_paper("PMC3213213.xml")
    print(paper.title())
    print(format_author(paper.first_author()))
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import IO, Any, Iterator

from .exceptions import ParseError

logger = logging.getLogger(__name__)

ROOT_TAG = "article"


@dataclass(frozen=True)
class ContributorName:
    """Name of an author or editor."""

    surname: str = ""
    given_names: str = ""

    def __str__(self) -> str:
        return f"{self.given_names} {self.surname}"


@dataclass(frozen=True)
class Contributor:
    name: ContributorName = field(default_factory=ContributorName)


@dataclass(frozen=True)
class ContribGroup:
    contributors: tuple[Contributor, ...] = ()


@dataclass(frozen=True)
class ArticleTitleGroup:
    article_title: str = ""
    alternative_title: str = ""


@dataclass(frozen=True)
class JournalTitleGroup:
    journal_title: str = ""


@dataclass(frozen=True)
class JournalMeta:
    title_group: JournalTitleGroup = field(default_factory=JournalTitleGroup)


@dataclass(frozen=True)
class ArticleID:
    """Tagged identifier, e.g. type="pmcid", id="3213213"."""

    type: str = ""
    id: str = ""


@dataclass(frozen=True)
class License:
    link: str = ""
    text: str = ""


@dataclass(frozen=True)
class Permissions:
    copyright_statement: str = ""
    copyright_year: str = ""
    license: License = field(default_factory=License)


@dataclass(frozen=True)
class KeywordGroup:
    title: str = ""
    language: str = ""
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class ArticleMeta:
    ids: tuple[ArticleID, ...] = ()
    title_group: ArticleTitleGroup = field(default_factory=ArticleTitleGroup)
    contributor_groups: tuple[ContribGroup, ...] = ()
    permissions: Permissions = field(default_factory=Permissions)
    keyword_group: KeywordGroup = field(default_factory=KeywordGroup)


@dataclass(frozen=True)
class Front:
    journal_meta: JournalMeta = field(default_factory=JournalMeta)
    article_meta: ArticleMeta = field(default_factory=ArticleMeta)


@dataclass(frozen=True)
class PaperDocument:
    """
    A parsed article.

    The accessors never raise: absent metadata comes back as "", [] or None.
    """

    front: Front = field(default_factory=Front)

    def title(self) -> str:
        return self.front.article_meta.title_group.article_title

    def alternative_title(self) -> str:
        return self.front.article_meta.title_group.alternative_title

    def journal_title(self) -> str:
        return self.front.journal_meta.title_group.journal_title

    def first_author(self) -> ContributorName | None:
        """First contributor of the first contributor group, if any."""
        groups = self.front.article_meta.contributor_groups
        if groups and groups[0].contributors:
            return groups[0].contributors[0].name
        return None

    def authors(self) -> list[ContributorName]:
        """All contributor names across every group, in document order."""
        return [
            contributor.name
            for group in self.front.article_meta.contributor_groups
            for contributor in group.contributors
        ]

    def article_id(self, id_type: str) -> str | None:
        """
        Look up an identifier by its pub-id-type.

        Args:
            id_type: Exact, case-sensitive type tag (e.g. "pmcid", "doi")

        Returns:
            The first matching identifier in document order, or None
        """
        for article_id in self.front.article_meta.ids:
            if article_id.type == id_type:
                return article_id.id
        return None

    def pmcid(self) -> str | None:
        return self.article_id("pmcid")

    def pmid(self) -> str | None:
        return self.article_id("pmid")

    def license_url(self) -> str:
        return self.front.article_meta.permissions.license.link

    def license_text(self) -> str:
        return self.front.article_meta.permissions.license.text

    def copyright_statement(self) -> str:
        return self.front.article_meta.permissions.copyright_statement

    def copyright_year(self) -> str:
        return self.front.article_meta.permissions.copyright_year

    def keywords(self) -> list[str]:
        return list(self.front.article_meta.keyword_group.keywords)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        return asdict(self)


def format_author(author: ContributorName | None) -> str:
    """Render an author as "<given names> <surname>", or "<nil>" when absent."""
    if author is None:
        return "<nil>"
    return str(author)


# Parsing


def _local_name(name: str) -> str:
    """Strip an ElementTree "{namespace}" prefix."""
    return name.rsplit("}", 1)[-1]


def _children(elem: ET.Element | None, tag: str) -> Iterator[ET.Element]:
    if elem is None:
        return
    for child in elem:
        if isinstance(child.tag, str) and _local_name(child.tag) == tag:
            yield child


def _child(elem: ET.Element | None, tag: str) -> ET.Element | None:
    return next(_children(elem, tag), None)


def _text(elem: ET.Element | None) -> str:
    # Includes text nested in inline markup such as <italic>
    if elem is None:
        return ""
    return "".join(elem.itertext())


def _child_text(elem: ET.Element | None, tag: str) -> str:
    return _text(_child(elem, tag))


def _attr(elem: ET.Element | None, name: str) -> str:
    # Matches namespaced attributes too, e.g. xlink:href and xml:lang
    if elem is None:
        return ""
    for key, value in elem.attrib.items():
        if _local_name(key) == name:
            return value
    return ""


def _parse_contrib_group(elem: ET.Element) -> ContribGroup:
    contributors = []
    for contrib in _children(elem, "contrib"):
        name = _child(contrib, "name")
        contributors.append(Contributor(
            name=ContributorName(
                surname=_child_text(name, "surname"),
                given_names=_child_text(name, "given-names"),
            ),
        ))
    return ContribGroup(contributors=tuple(contributors))


def _parse_permissions(elem: ET.Element | None) -> Permissions:
    license_elem = _child(elem, "license")
    return Permissions(
        copyright_statement=_child_text(elem, "copyright-statement"),
        copyright_year=_child_text(elem, "copyright-year"),
        license=License(
            link=_attr(license_elem, "href"),
            text=_child_text(license_elem, "license-p"),
        ),
    )


def _parse_keyword_groups(groups: list[ET.Element]) -> KeywordGroup:
    # Keywords from every group are merged; title and language come from the first
    first = groups[0] if groups else None
    return KeywordGroup(
        title=_child_text(first, "title"),
        language=_attr(first, "lang"),
        keywords=tuple(
            _text(kwd) for group in groups for kwd in _children(group, "kwd")
        ),
    )


def _parse_article_meta(elem: ET.Element | None) -> ArticleMeta:
    title_group = _child(elem, "title-group")
    return ArticleMeta(
        ids=tuple(
            ArticleID(type=_attr(id_elem, "pub-id-type"), id=_text(id_elem))
            for id_elem in _children(elem, "article-id")
        ),
        title_group=ArticleTitleGroup(
            article_title=_child_text(title_group, "article-title"),
            alternative_title=_child_text(title_group, "alt-title"),
        ),
        contributor_groups=tuple(
            _parse_contrib_group(group) for group in _children(elem, "contrib-group")
        ),
        permissions=_parse_permissions(_child(elem, "permissions")),
        keyword_group=_parse_keyword_groups(list(_children(elem, "kwd-group"))),
    )


def _parse_front(elem: ET.Element | None) -> Front:
    journal_meta = _child(elem, "journal-meta")
    journal_title_group = _child(journal_meta, "journal-title-group")
    return Front(
        journal_meta=JournalMeta(
            title_group=JournalTitleGroup(
                journal_title=_child_text(journal_title_group, "journal-title"),
            ),
        ),
        article_meta=_parse_article_meta(_child(elem, "article-meta")),
    )


def parse_paper(source: bytes | str | IO[bytes]) -> PaperDocument:
    """
    Parse article XML into a PaperDocument.

    Args:
        source: XML as bytes or str, or a binary file-like object

    Returns:
        PaperDocument holding whatever front matter is present

    Raises:
        ParseError: If the XML is malformed, the root is not <article>,
            or reading the stream fails
    """
    try:
        if isinstance(source, (bytes, str)):
            root = ET.fromstring(source)
        else:
            root = ET.parse(source).getroot()
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML: {e}") from e
    except OSError as e:
        raise ParseError(f"Failed to read XML: {e}") from e
    except (LookupError, ValueError) as e:
        # Unknown encoding in the XML declaration, or undecodable text
        raise ParseError(f"Cannot decode XML: {e}") from e

    if _local_name(root.tag) != ROOT_TAG:
        raise ParseError(
            f"Expected element type <{ROOT_TAG}> but have <{_local_name(root.tag)}>"
        )

    paper = PaperDocument(front=_parse_front(_child(root, "front")))
    logger.debug(f"Parsed paper (pmcid={paper.pmcid()}, title={paper.title()[:60]!r})")
    return paper


def load_paper(path: Path | str) -> PaperDocument:
    """
    Load a paper from an XML file.

    Args:
        path: Path to the XML file

    Returns:
        Parsed PaperDocument

    Raises:
        FileNotFoundError: If the path does not exist
        OSError: If the file cannot be opened
        ParseError: If the contents do not parse
    """
    path = Path(path)
    with open(path, "rb") as f:
        return parse_paper(f)
