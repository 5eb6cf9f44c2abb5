"""
DiaryParser / DateResolver / MetadataExtractor のテスト
"""

from datetime import date, datetime

import pytest

from src.journal.models import DiaryRecord
from src.journal.parser import (
    DateResolver,
    DiaryParser,
    MetadataExtractor,
    filter_records_by_date,
    resolve_date,
    to_prefix_pattern,
    to_strptime_format,
)
from src.journal.store import DiaryFileStore


class TestDateResolver:
    """日付解決のテスト"""

    def test_identifier_matching_format(self):
        """フォーマットに一致するファイル名はその日付になる"""
        resolver = DateResolver("YYYY-MM-DD")
        assert resolver.resolve("2024-01-15.md", "") == datetime(2024, 1, 15)

    def test_identifier_without_extension(self):
        assert resolve_date("2023-12-31", "YYYY-MM-DD", "") == datetime(2023, 12, 31)

    def test_identifier_with_directory(self):
        """パスの最後の要素だけを見る"""
        resolver = DateResolver("YYYY-MM-DD")
        assert resolver.resolve("diary/2024/2024-03-02.md", "") == datetime(2024, 3, 2)

    def test_custom_format(self):
        resolver = DateResolver("YYYYMMDD")
        assert resolver.resolve("20240704.md", "") == datetime(2024, 7, 4)

    def test_dotted_format_keeps_date_parts(self):
        resolver = DateResolver("YYYY.MM.DD")
        assert resolver.resolve("2024.05.06.md", "") == datetime(2024, 5, 6)

    def test_identifier_with_trailing_text(self):
        """日付の後ろに文字が続くファイル名でも先頭の日付を使う"""
        resolver = DateResolver("YYYY-MM-DD")
        assert resolver.resolve("diary/2024-01-15 周一.md", "没有日期") == datetime(2024, 1, 15)

    def test_identifier_prefix_with_custom_format(self):
        resolver = DateResolver("YYYYMMDD")
        assert resolver.resolve("20240704_独立日.md", "") == datetime(2024, 7, 4)

    def test_invalid_identifier_prefix_falls_back_to_body(self):
        resolver = DateResolver("YYYY-MM-DD")
        assert resolver.resolve("2024-13-45 笔记.md", "2024/03/08") == datetime(2024, 3, 8)

    def test_prefix_pattern(self):
        pattern = to_prefix_pattern("YYYY.M.D")
        assert pattern.match("2024.5.6 游记").group(0) == "2024.5.6"
        assert pattern.match("周一 2024.5.6") is None

    def test_falls_back_to_body_date(self):
        """ファイル名が日付でなければ本文中の日付を使う"""
        resolver = DateResolver("YYYY-MM-DD")
        body = "# 周末\n\n记录于 2024-02-10，天气晴。"
        assert resolver.resolve("weekend.md", body) == datetime(2024, 2, 10)

    def test_body_date_with_slashes(self):
        resolver = DateResolver("YYYY-MM-DD")
        assert resolver.resolve("notes.md", "日期 2024/03/08") == datetime(2024, 3, 8)

    def test_invalid_body_date_falls_back_to_now(self):
        resolver = DateResolver("YYYY-MM-DD")
        before = datetime.now()
        result = resolver.resolve("notes.md", "2024-13-45")
        after = datetime.now()
        assert before <= result <= after

    def test_no_date_returns_now(self):
        """どこにも日付がなければ現在時刻"""
        before = datetime.now()
        result = resolve_date("random-name.md", "YYYY-MM-DD", "没有日期的内容")
        after = datetime.now()
        assert before <= result <= after

    def test_never_raises_on_empty_input(self):
        assert isinstance(DateResolver().resolve("", ""), datetime)

    def test_format_translation(self):
        assert to_strptime_format("YYYY-MM-DD") == "%Y-%m-%d"
        assert to_strptime_format("YY/M/D HH:mm:ss") == "%y/%m/%d %H:%M:%S"


class TestMetadataExtractor:
    """メタデータ抽出のテスト"""

    @pytest.fixture
    def extractor(self):
        return MetadataExtractor()

    def test_title_from_first_heading(self, extractor):
        body = "前言\n#  美好的一天  \n## 小节\n# 第二个标题"
        assert extractor.extract(body).title == "美好的一天"

    def test_no_title(self, extractor):
        assert extractor.extract("只是普通文本").title is None

    def test_tags_keep_order_and_duplicates(self, extractor):
        body = "#工作 今天 #学习 然后又 #工作"
        assert extractor.extract(body).tags == ["工作", "学习", "工作"]

    def test_heading_is_not_a_tag(self, extractor):
        body = "# 标题\n内容 #tag1"
        assert extractor.extract(body).tags == ["tag1"]

    def test_tags_must_follow_whitespace(self, extractor):
        assert extractor.extract("a#b #c#d").tags == ["c"]

    @pytest.mark.parametrize(
        "body,expected",
        [
            ("心情：4", 4),
            ("心情:2", 2),
            ("心情： 5 分", 5),
            ("Mood: 3", 3),
            ("没有标记", None),
        ],
    )
    def test_mood_override(self, extractor, body, expected):
        assert extractor.extract(body).mood_override == expected


class TestDiaryParser:
    """DiaryParserのテスト"""

    @pytest.fixture
    def store(self, tmp_path):
        folder = tmp_path / "diary"
        folder.mkdir()
        (folder / "2024-01-15.md").write_text("# 新年计划\n今天很开心。心情：5", encoding="utf-8")
        (folder / "2024-01-16.md").write_text("普通的一天", encoding="utf-8")
        (folder / "broken.md").write_bytes(b"\xff\xfe\xfa invalid utf-8")
        (folder / "时间线.md").write_text("生成的文件", encoding="utf-8")
        return DiaryFileStore(tmp_path, "diary", exclude=["时间线.md"])

    def test_parse_text(self):
        parser = DiaryParser()
        record = parser.parse_text("2024-01-15.md", "# 标题\n#标签 内容 心情：4")
        assert record.date == datetime(2024, 1, 15)
        assert record.metadata.title == "标题"
        assert record.metadata.tags == ["标签"]
        assert record.metadata.mood_override == 4
        assert record.source == "2024-01-15.md"

    def test_record_is_immutable(self):
        record = DiaryParser().parse_text("2024-01-15.md", "内容")
        with pytest.raises(Exception):
            record.text = "changed"

    def test_scan_excludes_generated_files(self, store):
        parser = DiaryParser(store)
        assert parser.scan() == [
            "diary/2024-01-15.md",
            "diary/2024-01-16.md",
            "diary/broken.md",
        ]

    def test_parse_multiple_drops_unreadable_files(self, store, caplog):
        """読み込めないファイルはログを出して除外し、残りは処理を続ける"""
        parser = DiaryParser(store)
        records = parser.parse_multiple(parser.scan())

        assert [r.source for r in records] == ["diary/2024-01-15.md", "diary/2024-01-16.md"]
        assert records[0].metadata.title == "新年计划"
        assert "broken.md" in caplog.text

    def test_parse_file_without_store(self):
        with pytest.raises(RuntimeError):
            DiaryParser().parse_file("2024-01-15.md")


def _record(day: datetime) -> DiaryRecord:
    return DiaryRecord(date=day, text="")


def test_filter_records_by_date_inclusive():
    records = [_record(datetime(2024, 1, d)) for d in (1, 15, 31)] + [
        _record(datetime(2024, 2, 1))
    ]
    filtered = filter_records_by_date(records, "2024-01-01", "2024-01-31")
    assert [r.date.day for r in filtered] == [1, 15, 31]


def test_filter_records_by_date_open_bounds():
    records = [_record(datetime(2024, 1, 1, 23, 59)), _record(datetime(2024, 3, 1))]
    assert len(filter_records_by_date(records, "", "")) == 2
    assert len(filter_records_by_date(records, start=date(2024, 2, 1))) == 1
    assert len(filter_records_by_date(records, end="2024-01-01")) == 1
