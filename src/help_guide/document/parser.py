"""User guide document parser: loosely-typed JSON in, Document tree out.

Parsing is best-effort: malformed articles, sections, and feedback fields are
dropped at the smallest scope possible and logged at DEBUG. Nothing here
raises on bad input; the worst outcome is an empty Document.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from help_guide.constants import (
    ARTICLE_BODY_FIELD,
    ARTICLE_BUILD_MAX_FIELD,
    ARTICLE_BUILD_MIN_FIELD,
    ARTICLE_KEY_FIELD,
    ARTICLE_RELATED_FIELD,
    ARTICLE_TITLE_FIELD,
    BUILD_MAX_DEFAULT,
    BUILD_MIN_DEFAULT,
    ENTRIES_FIELD,
    FEEDBACK_EMAIL_FIELD,
    FEEDBACK_TWITTER_FIELD,
    SECTION_ARTICLES_FIELD,
    SECTION_DETAIL_FIELD,
    SECTION_TITLE_FIELD,
)
from help_guide.document.feedback import FeedbackEmail, FeedbackEntry, FeedbackTwitter
from help_guide.document.models import Article, Document, Section

logger = logging.getLogger(__name__)

# Integers as the document format writes them: optional sign, digits only
_INT_STRING_RE = re.compile(r"[+-]?\d+")


def _optional_string(raw: dict, field: str) -> str | None:
    """Non-empty string value of field, or None."""
    value = raw.get(field)
    if isinstance(value, str) and value:
        return value
    return None


def _build_number(raw: dict, field: str, default: int) -> int:
    """Integer or numeric-string build number; anything else falls back to default."""
    value = raw.get(field)
    # bool is an int subclass but never a build number
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INT_STRING_RE.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            # past the interpreter's int string conversion limit
            pass
    if value is not None:
        logger.debug("Ignoring %s=%r, using default %d", field, value, default)
    return default


def _related_keys(raw: dict) -> tuple[str, ...]:
    value = raw.get(ARTICLE_RELATED_FIELD)
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    if value is not None:
        logger.debug("Ignoring %s=%r", ARTICLE_RELATED_FIELD, value)
    return ()


def parse_article(raw: Any) -> Article | None:
    """Build an Article from a raw field map.

    Returns None when the map is not a dict or lacks a non-empty title or
    body. Build numbers are not compared against any host build here; use
    Article.matches_build at query time.
    """
    if not isinstance(raw, dict):
        logger.debug("Dropping article: expected an object, got %s", type(raw).__name__)
        return None

    title = raw.get(ARTICLE_TITLE_FIELD)
    body = raw.get(ARTICLE_BODY_FIELD)
    if not isinstance(title, str) or not title:
        logger.debug("Dropping article %r: missing title", raw.get(ARTICLE_KEY_FIELD))
        return None
    if not isinstance(body, str) or not body:
        logger.debug("Dropping article %r: missing body", title)
        return None

    return Article(
        title=title,
        body=body,
        key=_optional_string(raw, ARTICLE_KEY_FIELD),
        build_min=_build_number(raw, ARTICLE_BUILD_MIN_FIELD, BUILD_MIN_DEFAULT),
        build_max=_build_number(raw, ARTICLE_BUILD_MAX_FIELD, BUILD_MAX_DEFAULT),
        related_keys=_related_keys(raw),
    )


def parse_section(raw: Any) -> Section | None:
    """Build a Section from a raw section map.

    Articles that fail to parse are skipped. A section left with no articles
    is returned as None and excluded from the document.
    """
    if not isinstance(raw, dict):
        logger.debug("Dropping section: expected an object, got %s", type(raw).__name__)
        return None

    title = _optional_string(raw, SECTION_TITLE_FIELD)
    raw_articles = raw.get(SECTION_ARTICLES_FIELD)
    if not isinstance(raw_articles, list):
        raw_articles = []

    articles = tuple(
        article
        for article in (parse_article(a) for a in raw_articles)
        if article is not None
    )
    if not articles:
        logger.debug("Dropping section %r: no valid articles", title)
        return None

    return Section(
        articles=articles,
        title=title,
        detail=_optional_string(raw, SECTION_DETAIL_FIELD),
    )


def parse_sections(raw_entries: Any) -> tuple[Section, ...]:
    if not isinstance(raw_entries, list):
        if raw_entries is not None:
            logger.debug("Ignoring entries of type %s", type(raw_entries).__name__)
        return ()
    return tuple(
        section
        for section in (parse_section(s) for s in raw_entries)
        if section is not None
    )


def parse_feedback(raw: dict) -> tuple[FeedbackEntry, ...]:
    """Feedback entries declared on a document object, email first."""
    entries: list[FeedbackEntry] = []

    email = raw.get(FEEDBACK_EMAIL_FIELD)
    if isinstance(email, str):
        parsed_email = FeedbackEmail.from_string(email)
        if parsed_email is not None:
            entries.append(parsed_email)
        else:
            logger.debug("Rejecting %s=%r", FEEDBACK_EMAIL_FIELD, email)

    twitter = raw.get(FEEDBACK_TWITTER_FIELD)
    if isinstance(twitter, str):
        parsed_twitter = FeedbackTwitter.from_string(twitter)
        if parsed_twitter is not None:
            entries.append(parsed_twitter)
        else:
            logger.debug("Rejecting %s=%r", FEEDBACK_TWITTER_FIELD, twitter)

    return tuple(entries)


def parse_document(raw: Any) -> Document:
    """Parse a decoded JSON structure into a Document.

    Accepts an object with an ``entries`` array (plus optional feedback
    fields) or a bare array of sections. Any other shape yields an empty
    Document.
    """
    if isinstance(raw, dict):
        return Document(
            sections=parse_sections(raw.get(ENTRIES_FIELD)),
            feedback=parse_feedback(raw),
        )
    if isinstance(raw, list):
        return Document(sections=parse_sections(raw))
    logger.debug("Unsupported document root %s", type(raw).__name__)
    return Document()


def parse_document_bytes(data: bytes | str) -> Document:
    """Decode JSON text and parse it. Invalid JSON yields an empty Document."""
    try:
        raw = json.loads(data)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError and oversized number literals are
        # all ValueError; RecursionError comes from pathologically deep nesting
        logger.warning("Guide document is not valid JSON: %s", e)
        return Document()
    return parse_document(raw)


def load_document(path: Path) -> Document:
    """Read and parse a guide document from disk.

    A missing or unreadable file yields an empty Document.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.warning("Cannot read guide document %s: %s", path, e)
        return Document()
    document = parse_document_bytes(data)
    logger.debug(
        "Loaded %s: %d sections, %d feedback entries",
        path, document.section_count, len(document.feedback),
    )
    return document
