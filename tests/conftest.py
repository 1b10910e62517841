"""Shared test fixtures."""

import json

import pytest

from help_guide.document.parser import parse_document


GUIDE = {
    "feedback_email": "JellyStyle Support <support@example.com>",
    "feedback_twitter": "@guidehelp",
    "entries": [
        {
            "title": "Getting Started",
            "detail": "More help is available online.",
            "articles": [
                {
                    "key": "welcome",
                    "title": "Welcome",
                    "body": "Lorem ipsum bibendum dolor.",
                    "build_min": 100,
                    "related_articles": ["settings", "missing-key"],
                },
                {
                    "key": "basics",
                    "title": "The Basics",
                    "body": "Consectetur adipiscing elit.",
                    "build_max": "300",
                    "related_articles": "welcome",
                },
            ],
        },
        {
            "title": "Empty Section",
            "articles": [],
        },
        {
            "title": "Advanced",
            "articles": [
                {
                    "key": "settings",
                    "title": "Settings",
                    "body": "Vestibulum bibendum sem.",
                    "build_min": 365,
                    "build_max": 867,
                },
                {
                    "key": "broken",
                    "title": "No body here",
                },
                {
                    "key": "",
                    "title": "Keyless",
                    "body": "An article without a key.",
                },
            ],
        },
    ],
}


@pytest.fixture
def guide_dict():
    """A fresh copy of the sample guide structure."""
    return json.loads(json.dumps(GUIDE))


@pytest.fixture
def guide_document(guide_dict):
    return parse_document(guide_dict)


@pytest.fixture
def guide_file(tmp_path, guide_dict):
    """The sample guide written to disk as JSON."""
    path = tmp_path / "guide.json"
    path.write_text(json.dumps(guide_dict), encoding="utf-8")
    return path
