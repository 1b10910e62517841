"""Centralized document field names and parsing defaults."""

import sys

# Top-level document fields
ENTRIES_FIELD = "entries"
FEEDBACK_EMAIL_FIELD = "feedback_email"
FEEDBACK_TWITTER_FIELD = "feedback_twitter"

# Section fields
SECTION_TITLE_FIELD = "title"
SECTION_DETAIL_FIELD = "detail"
SECTION_ARTICLES_FIELD = "articles"

# Article fields
ARTICLE_KEY_FIELD = "key"
ARTICLE_TITLE_FIELD = "title"
ARTICLE_BODY_FIELD = "body"
ARTICLE_BUILD_MIN_FIELD = "build_min"
ARTICLE_BUILD_MAX_FIELD = "build_max"
ARTICLE_RELATED_FIELD = "related_articles"

# Build range defaults: an article with no range is visible in every build
BUILD_MIN_DEFAULT: int = 1
BUILD_MAX_DEFAULT: int = sys.maxsize

# Presentation labels handed to the host with structured data
FEEDBACK_SECTION_TITLE = "Feedback"
RELATED_SECTION_TITLE = "Related"
FEEDBACK_EMAIL_LABEL = "Email"
FEEDBACK_TWITTER_LABEL = "Twitter"
