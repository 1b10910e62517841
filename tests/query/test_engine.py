"""Tests for query/engine.py."""

import pytest

from help_guide.document.feedback import FeedbackEmail, FeedbackTwitter
from help_guide.document.models import Article, Document, IndexPath, Section
from help_guide.document.parser import parse_document
from help_guide.query.engine import QueryEngine


@pytest.fixture
def engine(guide_document):
    return QueryEngine(guide_document)


def _rows(engine):
    return [len(s.articles) for s in engine.filtered_sections]


def _keys(engine):
    return [a.key for s in engine.filtered_sections for a in s.articles]


class TestUnfiltered:
    def test_all_sections_visible(self, engine, guide_document):
        assert _rows(engine) == [len(s.articles) for s in guide_document.sections]
        assert engine.filtered_sections[0].title == "Getting Started"

    def test_feedback_section_appended(self, engine, guide_document):
        assert engine.has_feedback_section
        assert engine.section_count == guide_document.section_count + 1
        feedback_index = guide_document.section_count
        assert engine.feedback_section_index == feedback_index
        assert engine.row_count(feedback_index) == 2
        assert engine.section_title(feedback_index) == "Feedback"
        assert engine.section_detail(feedback_index) is None

    def test_section_shape_matches_document(self, engine, guide_document):
        for i, section in enumerate(guide_document.sections):
            assert engine.row_count(i) == len(section.articles)
            assert engine.section_title(i) == section.title
            assert engine.section_detail(i) == section.detail

    def test_no_feedback_section_without_feedback(self, guide_dict):
        del guide_dict["feedback_email"]
        del guide_dict["feedback_twitter"]
        engine = QueryEngine(parse_document(guide_dict))
        assert not engine.has_feedback_section
        assert engine.feedback_section_index is None
        assert engine.section_count == 2

    def test_include_feedback_off(self, engine):
        engine.include_feedback = False
        assert engine.section_count == 2
        assert engine.feedback_at(2, 0) is None


class TestQuery:
    def test_case_insensitive_query(self, engine):
        engine.query = "biBE"
        assert _rows(engine) == [1, 1]
        assert _keys(engine) == ["welcome", "settings"]
        assert engine.section_count == 3

    def test_query_drops_empty_sections(self, engine):
        engine.query = "adipiscing"
        assert [s.title for s in engine.filtered_sections] == ["Getting Started"]

    def test_no_match(self, engine):
        engine.query = "nothing matches this"
        assert engine.filtered_sections == []
        assert engine.section_count == 1

    def test_empty_query_matches_everything(self, engine, guide_document):
        engine.query = ""
        assert len(engine.filtered_sections) == guide_document.section_count

    def test_clearing_query_restores(self, engine):
        engine.query = "biBE"
        engine.query = None
        assert _rows(engine) == [2, 2]

    def test_scenario(self):
        document = parse_document({"entries": [
            {"title": "A", "articles": [
                {"title": "T1", "body": "B1 bibendum"},
                {"title": "T2", "body": "B2"},
            ]},
            {"title": "Empty", "articles": []},
            {"title": "C", "articles": [{"key": "k", "title": "T3", "body": "bibendum B3"}]},
        ]})
        engine = QueryEngine(document, query="bibendum")
        assert [s.title for s in engine.filtered_sections] == ["A", "C"]
        assert [[a.title for a in s.articles] for s in engine.filtered_sections] == [["T1"], ["T3"]]


class TestPredicate:
    def test_predicate(self, engine):
        engine.predicate = lambda a: a.build_min >= 300
        assert _rows(engine) == [1]
        assert _keys(engine) == ["settings"]

    def test_always_false(self, engine):
        engine.predicate = lambda a: False
        assert engine.filtered_sections == []

    def test_query_and_predicate_compose(self, engine):
        engine.query = "e"
        query_only = set(_keys(engine))
        engine.predicate = lambda a: a.key != "welcome"
        combined = set(_keys(engine))
        assert combined <= query_only
        assert "welcome" not in combined


class TestBuildNumber:
    def test_build_gating(self, engine):
        engine.build_number = 370
        assert _rows(engine) == [1, 2]
        assert _keys(engine) == ["welcome", "settings", None]

    def test_build_excludes_all_in_section(self, engine):
        engine.build_number = 50
        assert _keys(engine) == ["basics", None]

    def test_build_above_range(self, engine):
        engine.build_number = 900
        assert _keys(engine) == ["welcome", None]

    def test_all_filters_together(self, engine):
        engine.query = "bibendum"
        engine.predicate = lambda a: a.key is not None
        engine.build_number = 50
        assert engine.filtered_sections == []


class TestGroupTitle:
    def test_flattens_in_order(self, engine):
        engine.group_title = "All Articles"
        assert len(engine.filtered_sections) == 1
        section = engine.filtered_sections[0]
        assert section.title == "All Articles"
        assert section.detail is None
        assert [a.title for a in section.articles] == ["Welcome", "The Basics", "Settings", "Keyless"]

    def test_flatten_removes_feedback(self, engine):
        engine.group_title = "Results"
        assert not engine.has_feedback_section
        assert engine.section_count == 1

    def test_flatten_with_query(self, engine):
        engine.query = "biBE"
        engine.group_title = "Results"
        assert engine.row_count(0) == 2

    def test_flatten_empty_result(self, engine):
        engine.query = "nothing matches this"
        engine.group_title = "Results"
        assert engine.filtered_sections == []
        assert engine.section_count == 0

    def test_unset_restores_sections(self, engine):
        engine.group_title = "Results"
        engine.group_title = None
        assert _rows(engine) == [2, 2]
        assert engine.has_feedback_section


class TestRelated:
    def test_show_related(self, engine, guide_document):
        welcome = guide_document.article_for_key("welcome")
        engine.show_related(welcome)
        assert engine.section_count == 1
        assert engine.section_title(0) == "Related"
        assert _keys(engine) == ["settings"]

    def test_reset(self, engine, guide_document):
        engine.query = "zzz"
        engine.show_related(guide_document.article_for_key("welcome"))
        engine.build_number = 1
        engine.reset()
        assert _rows(engine) == [2, 2]
        assert engine.query is None
        assert engine.predicate is None


class TestAccessors:
    def test_section_at(self, engine):
        assert engine.section_at(-1) is None
        assert engine.section_at(100) is None
        assert engine.section_at(1).title == engine.filtered_sections[1].title

    def test_feedback_section_is_not_a_section(self, engine):
        assert engine.section_at(engine.feedback_section_index) is None

    def test_article_at(self, engine):
        assert engine.article_at(100, 0) is None
        assert engine.article_at(0, 5) is None
        assert engine.article_at(0, -1) is None
        assert engine.article_at(1, 0) == engine.filtered_sections[1].articles[0]

    def test_row_count_out_of_range(self, engine):
        assert engine.row_count(30) == 0
        assert engine.row_count(-1) == 0

    def test_feedback_at(self, engine):
        index = engine.feedback_section_index
        assert isinstance(engine.feedback_at(index, 0), FeedbackEmail)
        assert isinstance(engine.feedback_at(index, 1), FeedbackTwitter)
        assert engine.feedback_at(index, 2) is None
        assert engine.feedback_at(0, 0) is None

    def test_index_path_for(self, engine):
        article = engine.filtered_sections[0].articles[1]
        assert engine.index_path_for(article) == IndexPath(section=0, row=1)

    def test_index_path_uses_content_not_identity(self, engine):
        copy = Article(title="Settings", body="Vestibulum bibendum sem.", key="settings")
        assert engine.index_path_for(copy) == IndexPath(section=1, row=0)

    def test_index_path_missing(self, engine):
        external = Article(title="Outside", body="Not in this document", key="outside")
        assert engine.index_path_for(external) is None

    def test_index_path_after_filter(self, engine, guide_document):
        settings = guide_document.article_for_key("settings")
        engine.query = "vestibulum"
        assert engine.index_path_for(settings) == IndexPath(0, 0)
        engine.query = "adipiscing"
        assert engine.index_path_for(settings) is None


class TestHighlightRanges:
    def test_ranges(self, engine):
        engine.query = "bi"
        assert engine.highlight_ranges("Bibendum bibi") == [(0, 2), (9, 11), (11, 13)]

    def test_no_query(self, engine):
        assert engine.highlight_ranges("anything") == []

    def test_special_characters_are_literal(self, engine):
        engine.query = "a.b"
        assert engine.highlight_ranges("axb a.b") == [(4, 7)]


class TestDocumentUntouched:
    def test_filtering_does_not_mutate_document(self):
        section = Section(title="S", articles=(Article(title="A", body="x"), Article(title="B", body="y")))
        document = Document(sections=(section,))
        engine = QueryEngine(document, query="x", group_title="G")
        assert len(engine.filtered_sections[0].articles) == 1
        assert document.sections == (section,)
        assert len(document.sections[0].articles) == 2
