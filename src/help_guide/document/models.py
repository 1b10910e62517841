"""Data models for user guide documents: articles, sections, and the document tree."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Callable, Iterator

from help_guide.constants import BUILD_MAX_DEFAULT, BUILD_MIN_DEFAULT

if TYPE_CHECKING:
    from help_guide.document.feedback import FeedbackEntry


@dataclasses.dataclass(frozen=True)
class IndexPath:
    """Position of a row in a sectioned list."""

    section: int
    row: int


@dataclasses.dataclass(frozen=True)
class Article:
    """A single help article.

    Construct through ``parse_article`` when reading raw documents; that is
    where required fields are enforced. Direct construction is for synthetic
    articles and tests.
    """

    title: str
    body: str
    key: str | None = None
    build_min: int = BUILD_MIN_DEFAULT
    build_max: int = BUILD_MAX_DEFAULT
    related_keys: tuple[str, ...] = ()

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against title or body."""
        if not query:
            return True
        needle = query.lower()
        return needle in self.title.lower() or needle in self.body.lower()

    def matches_build(self, build_number: int) -> bool:
        """True if build_number falls inside [build_min, build_max]."""
        return self.build_min <= build_number <= self.build_max

    def same_content(self, other: Article) -> bool:
        """Structural identity used for lookups across derived copies."""
        return (
            self.key == other.key
            and self.title == other.title
            and self.body == other.body
        )

    def related_to(self, other: Article) -> bool:
        """True if other is listed in this article's related keys.

        Only keyed articles can be related; there is no title/body fallback.
        """
        return other.key is not None and other.key in self.related_keys


def related_predicate(article: Article) -> Callable[[Article], bool]:
    """Build a filter that keeps the articles related to ``article``."""
    return article.related_to


@dataclasses.dataclass(frozen=True)
class Section:
    """An optionally-titled, ordered group of articles."""

    articles: tuple[Article, ...]
    title: str | None = None
    detail: str | None = None

    def filtered(self, predicate: Callable[[Article], bool]) -> Section | None:
        """Derive a section holding only the articles that satisfy predicate.

        Returns None rather than an empty section, so callers can drop
        sections with no matches.
        """
        articles = tuple(a for a in self.articles if predicate(a))
        if not articles:
            return None
        return dataclasses.replace(self, articles=articles)

    def filtered_by_query(self, query: str) -> Section | None:
        return self.filtered(lambda article: article.matches(query))

    def filtered_by_build(self, build_number: int) -> Section | None:
        return self.filtered(lambda article: article.matches_build(build_number))

    def article_at(self, row: int) -> Article | None:
        if row < 0 or row >= len(self.articles):
            return None
        return self.articles[row]


@dataclasses.dataclass(frozen=True)
class Document:
    """A parsed user guide: sections of articles plus feedback entries.

    Immutable after parsing; safe to share between threads.
    """

    sections: tuple[Section, ...] = ()
    feedback: tuple[FeedbackEntry, ...] = ()

    @property
    def section_count(self) -> int:
        return len(self.sections)

    def section_at(self, index: int) -> Section | None:
        if index < 0 or index >= len(self.sections):
            return None
        return self.sections[index]

    def iter_articles(self) -> Iterator[Article]:
        """Yield every article, sections in order, rows in order."""
        for section in self.sections:
            yield from section.articles

    def article_for_key(self, key: str) -> Article | None:
        """First article whose key equals ``key``. Keyless articles never match."""
        for article in self.iter_articles():
            if article.key is not None and article.key == key:
                return article
        return None

    def related_articles(self, article: Article) -> list[Article]:
        """Resolve related keys to articles, in related-key order.

        Keys that do not resolve are skipped.
        """
        related: list[Article] = []
        for key in article.related_keys:
            found = self.article_for_key(key)
            if found is not None:
                related.append(found)
        return related
