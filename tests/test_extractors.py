"""
抽出器（キーワード・心情・活動・要約）のテスト
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from src.journal.extractors import (
    ActivityExtractor,
    KeywordExtractor,
    MoodScorer,
    SummaryGenerator,
    parse_leading_int,
    split_list_response,
)
from src.journal.models import DiaryMetadata, DiaryRecord


def make_record(text: str, mood_override=None) -> DiaryRecord:
    return DiaryRecord(
        date=datetime(2024, 1, 15),
        text=text,
        metadata=DiaryMetadata(mood_override=mood_override),
    )


@pytest.fixture
def mock_backend():
    """TextAnalysisBackendのモック"""
    backend = MagicMock()
    backend.kind = "local"
    return backend


class TestKeywordExtractor:
    """キーワード抽出のテスト"""

    def test_frequency_top_keyword(self):
        """出現回数の多い語が選ばれる"""
        extractor = KeywordExtractor(max_keywords=1)
        assert extractor.extract("apple banana banana banana") == ["banana"]

    def test_ties_keep_first_seen_order(self):
        extractor = KeywordExtractor(max_keywords=3)
        text = "writing reading writing reading coding"
        assert extractor.extract(text) == ["writing", "reading", "coding"]

    def test_single_characters_and_punctuation_ignored(self):
        extractor = KeywordExtractor(max_keywords=5)
        text = "a, b! 工作。 工作？ x"
        assert extractor.extract(text) == ["工作"]

    def test_cjk_runs_are_single_tokens(self):
        extractor = KeywordExtractor(max_keywords=5)
        assert extractor.extract("今天天气很好，今天天气很好") == ["今天天气很好"]

    def test_empty_text(self):
        assert KeywordExtractor().extract("") == []

    def test_backend_response_is_split_and_truncated(self, mock_backend):
        mock_backend.complete.return_value = "工作, 学习 ,运动,,读书"
        extractor = KeywordExtractor(mock_backend, max_keywords=3)

        assert extractor.extract("日记内容") == ["工作", "学习", "运动"]
        prompt = mock_backend.complete.call_args[0][0]
        assert "3个最重要的关键词" in prompt
        assert "日记内容" in prompt

    def test_backend_malformed_response_passes_through(self, mock_backend):
        """切り詰め以外の検証はしない（空要素もそのまま）"""
        mock_backend.complete.return_value = "a,,b,c"
        assert KeywordExtractor(mock_backend, max_keywords=3).extract("内容") == ["a", "", "b"]

    def test_backend_empty_response(self, mock_backend):
        mock_backend.complete.return_value = ""
        assert KeywordExtractor(mock_backend).extract("内容") == []


class TestMoodScorer:
    """心情スコアのテスト"""

    def test_two_positive_words_score_five(self):
        assert MoodScorer().score(make_record("今天很开心，也很快乐。")) == 5

    def test_three_negative_words_score_one(self):
        assert MoodScorer().score(make_record("难过、伤心又失望。")) == 1

    def test_equal_counts_score_three(self):
        assert MoodScorer().score(make_record("开心但是也难过")) == 3

    def test_no_dictionary_words_is_neutral(self):
        assert MoodScorer().score(make_record("写代码")) == 3

    def test_repeated_word_counts_each_occurrence(self):
        assert MoodScorer().score(make_record("开心开心")) == 5
        assert MoodScorer().score(make_record("开心开心开心开心难过")) == 5
        assert MoodScorer().score(make_record("开心难过难过")) == 2

    def test_override_takes_priority(self, mock_backend):
        scorer = MoodScorer(mock_backend)
        assert scorer.score(make_record("难过难过难过", mood_override=4)) == 4
        mock_backend.complete.assert_not_called()

    def test_out_of_range_override_is_ignored(self):
        assert MoodScorer().score(make_record("开心开心", mood_override=9)) == 5

    def test_override_respects_configured_range(self):
        scorer = MoodScorer(score_range=(2, 4))
        assert scorer.score(make_record("", mood_override=1)) == 3
        assert scorer.score(make_record("", mood_override=4)) == 4

    @pytest.mark.parametrize(
        "response,expected",
        [("4", 4), (" 2\n", 2), ("5分", 5), ("非常积极", 3), ("0", 3), ("7", 3), ("", 3)],
    )
    def test_backend_response_parsing(self, mock_backend, response, expected):
        mock_backend.complete.return_value = response
        assert MoodScorer(mock_backend).score(make_record("内容")) == expected


class TestActivityExtractor:
    """活動抽出のテスト"""

    def test_rules_extract_phrase_after_marker(self):
        text = "今天去公园散步，然后做作业。晚上参加聚会！"
        assert ActivityExtractor().extract(text) == ["公园散步", "作业", "聚会"]

    def test_rules_deduplicate(self):
        assert ActivityExtractor().extract("去公园。去公园！") == ["公园"]

    def test_no_markers(self):
        assert ActivityExtractor().extract("天气很好。") == []

    def test_backend_list_has_no_cap(self, mock_backend):
        mock_backend.complete.return_value = "跑步, 看书, 做饭, 开会, 写日记, 散步"
        assert len(ActivityExtractor(mock_backend).extract("内容")) == 6


class TestSummaryGenerator:
    """要約生成のテスト"""

    def test_first_paragraph(self):
        text = "第一段内容。\n\n第二段内容。"
        assert SummaryGenerator().generate(text) == "第一段内容。"

    def test_paragraph_break_with_whitespace_line(self):
        assert SummaryGenerator().generate("第一段\r\n  \r\n第二段") == "第一段"

    def test_long_paragraph_truncated(self):
        text = "字" * 150
        summary = SummaryGenerator().generate(text)
        assert summary == "字" * 100 + "..."

    def test_exactly_limit_not_truncated(self):
        text = "字" * 100
        assert SummaryGenerator().generate(text) == text

    def test_backend_returns_raw_response(self, mock_backend):
        mock_backend.complete.return_value = "今天过得很充实。"
        assert SummaryGenerator(mock_backend).generate("内容") == "今天过得很充实。"


def test_split_list_response():
    assert split_list_response(" a , b,, c ") == ["a", "b", "", "c"]
    assert split_list_response("") == []
    assert split_list_response("  \n") == []


def test_parse_leading_int():
    assert parse_leading_int("3 points") == 3
    assert parse_leading_int("score 3") is None
