"""Query engine: the filtered, searchable view of a Document.

Holds the query state a presentation layer edits (search text, predicate,
build number, group title) and recomputes the visible sections synchronously
whenever any of it changes. The Document itself is never mutated.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from help_guide.constants import FEEDBACK_SECTION_TITLE, RELATED_SECTION_TITLE
from help_guide.document.feedback import FeedbackEntry
from help_guide.document.models import (
    Article,
    Document,
    IndexPath,
    Section,
    related_predicate,
)

logger = logging.getLogger(__name__)

ArticlePredicate = Callable[[Article], bool]


class QueryEngine:
    """Filter/search view-model over a Document.

    Row layout seen by the host: the filtered article sections, followed by a
    feedback section when results are not grouped and the document declares
    feedback entries.
    """

    def __init__(
        self,
        document: Document,
        query: str | None = None,
        predicate: ArticlePredicate | None = None,
        build_number: int | None = None,
        group_title: str | None = None,
        include_feedback: bool = True,
    ):
        self._document = document
        self._query = query
        self._predicate = predicate
        self._build_number = build_number
        self._group_title = group_title
        self._include_feedback = include_feedback
        self._filtered_sections: list[Section] = []
        self._recompute()

    # --- State ---

    @property
    def document(self) -> Document:
        return self._document

    @property
    def query(self) -> str | None:
        return self._query

    @query.setter
    def query(self, value: str | None) -> None:
        self._query = value
        self._recompute()

    @property
    def predicate(self) -> ArticlePredicate | None:
        return self._predicate

    @predicate.setter
    def predicate(self, value: ArticlePredicate | None) -> None:
        self._predicate = value
        self._recompute()

    @property
    def build_number(self) -> int | None:
        return self._build_number

    @build_number.setter
    def build_number(self, value: int | None) -> None:
        self._build_number = value
        self._recompute()

    @property
    def group_title(self) -> str | None:
        return self._group_title

    @group_title.setter
    def group_title(self, value: str | None) -> None:
        self._group_title = value
        self._recompute()

    @property
    def include_feedback(self) -> bool:
        return self._include_feedback

    @include_feedback.setter
    def include_feedback(self, value: bool) -> None:
        self._include_feedback = value
        self._recompute()

    def show_related(self, article: Article, title: str = RELATED_SECTION_TITLE) -> None:
        """Group the articles related to ``article`` under one section."""
        self._predicate = related_predicate(article)
        self._group_title = title
        self._recompute()

    def reset(self) -> None:
        """Clear every filter, showing the whole document."""
        self._query = None
        self._predicate = None
        self._build_number = None
        self._group_title = None
        self._recompute()

    # --- Filtering ---

    def _recompute(self) -> None:
        sections = list(self._document.sections)

        if self._query is not None:
            query = self._query
            sections = _narrow(sections, lambda s: s.filtered_by_query(query))

        if self._predicate is not None:
            predicate = self._predicate
            sections = _narrow(sections, lambda s: s.filtered(predicate))

        if self._build_number is not None:
            build_number = self._build_number
            sections = _narrow(sections, lambda s: s.filtered_by_build(build_number))

        if self._group_title is not None:
            articles = tuple(a for s in sections for a in s.articles)
            sections = [Section(articles=articles, title=self._group_title)] if articles else []

        self._filtered_sections = sections
        logger.debug(
            "Recomputed view: %d sections, %d articles, feedback=%s",
            len(sections),
            sum(len(s.articles) for s in sections),
            self.has_feedback_section,
        )

    @property
    def filtered_sections(self) -> list[Section]:
        return list(self._filtered_sections)

    @property
    def has_feedback_section(self) -> bool:
        return (
            self._include_feedback
            and self._group_title is None
            and bool(self._document.feedback)
        )

    @property
    def feedback_section_index(self) -> int | None:
        if not self.has_feedback_section:
            return None
        return len(self._filtered_sections)

    # --- Accessing data ---

    @property
    def section_count(self) -> int:
        """Number of sections the host should display, feedback included."""
        return len(self._filtered_sections) + (1 if self.has_feedback_section else 0)

    def row_count(self, section_index: int) -> int:
        if section_index == self.feedback_section_index:
            return len(self._document.feedback)
        section = self.section_at(section_index)
        return len(section.articles) if section is not None else 0

    def section_title(self, section_index: int) -> str | None:
        if section_index == self.feedback_section_index:
            return FEEDBACK_SECTION_TITLE
        section = self.section_at(section_index)
        return section.title if section is not None else None

    def section_detail(self, section_index: int) -> str | None:
        section = self.section_at(section_index)
        return section.detail if section is not None else None

    def section_at(self, index: int) -> Section | None:
        """Filtered article section at index. The feedback section is not a Section."""
        if index < 0 or index >= len(self._filtered_sections):
            return None
        return self._filtered_sections[index]

    def article_at(self, section_index: int, row: int) -> Article | None:
        section = self.section_at(section_index)
        if section is None:
            return None
        return section.article_at(row)

    def feedback_at(self, section_index: int, row: int) -> FeedbackEntry | None:
        if section_index != self.feedback_section_index:
            return None
        feedback = self._document.feedback
        if row < 0 or row >= len(feedback):
            return None
        return feedback[row]

    def index_path_for(self, article: Article) -> IndexPath | None:
        """Position of an article in the current view, matched by content.

        Filtered sections hold copies, so matching is on key, title and
        body rather than object identity.
        """
        for section_index, section in enumerate(self._filtered_sections):
            for row, candidate in enumerate(section.articles):
                if candidate.same_content(article):
                    return IndexPath(section=section_index, row=row)
        return None

    def highlight_ranges(self, text: str) -> list[tuple[int, int]]:
        """Non-overlapping (start, end) spans of the current query in text."""
        if not self._query:
            return []
        pattern = re.compile(re.escape(self._query), re.IGNORECASE)
        return [m.span() for m in pattern.finditer(text)]


def _narrow(
    sections: list[Section],
    derive: Callable[[Section], Section | None],
) -> list[Section]:
    """Map sections through derive, dropping the ones that come back empty."""
    return [derived for derived in (derive(s) for s in sections) if derived is not None]
