"""Selection results returned to the host instead of delegate callbacks."""

from __future__ import annotations

from dataclasses import dataclass

from help_guide.document.feedback import FeedbackEntry
from help_guide.document.models import Article, IndexPath
from help_guide.query.engine import QueryEngine


@dataclass(frozen=True)
class ArticleSelection:
    article: Article
    index_path: IndexPath


@dataclass(frozen=True)
class FeedbackSelection:
    entry: FeedbackEntry
    index_path: IndexPath


Selection = ArticleSelection | FeedbackSelection


def select(engine: QueryEngine, index_path: IndexPath) -> Selection | None:
    """Resolve a selected row to what it represents, or None if out of range."""
    article = engine.article_at(index_path.section, index_path.row)
    if article is not None:
        return ArticleSelection(article=article, index_path=index_path)
    entry = engine.feedback_at(index_path.section, index_path.row)
    if entry is not None:
        return FeedbackSelection(entry=entry, index_path=index_path)
    return None
