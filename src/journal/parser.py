"""
DiaryParser: 日記テキストから日付・メタデータを抽出してレコード化する

設計方針:
- 日付は「ファイル名 → 本文中の日付 → 現在時刻」の順に解決し、決して例外を出さない
- 心情マーカー（心情：N）の抽出はここで一度だけ行い、MoodScorer はその値を使う
- 一括読み込みでは1件の失敗で全体を止めない（ログを出して除外）

関連:
- src/journal/store.py: ファイル一覧・読み込み
- src/journal/analyzer.py: 生成したレコードを解析
"""

import logging
import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from .models import DiaryMetadata, DiaryRecord
from .store import DiaryFileStore

logger = logging.getLogger(__name__)

# moment形式のトークン → (strptimeディレクティブ, 数字の正規表現)（長いトークンを先に評価）
_FORMAT_TOKENS = [
    ("YYYY", "%Y", r"\d{4}"),
    ("YY", "%y", r"\d{2}"),
    ("MM", "%m", r"\d{2}"),
    ("M", "%m", r"\d{1,2}"),
    ("DD", "%d", r"\d{2}"),
    ("D", "%d", r"\d{1,2}"),
    ("HH", "%H", r"\d{2}"),
    ("mm", "%M", r"\d{2}"),
    ("ss", "%S", r"\d{2}"),
]
_TOKEN_PATTERN = re.compile("|".join(token for token, _, _ in _FORMAT_TOKENS))
_TOKEN_MAP = {token: directive for token, directive, _ in _FORMAT_TOKENS}
_TOKEN_REGEX = {token: regex for token, _, regex in _FORMAT_TOKENS}

_BODY_DATE_PATTERN = re.compile(r"(\d{4}[-/]\d{2}[-/]\d{2})")
_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z][A-Za-z0-9]*$")

_TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_TAG_PATTERN = re.compile(r"(?:^|\s)#([^\s#]+)")
MOOD_MARKER_PATTERN = re.compile(r"(?:心情|mood)\s*[：:]\s*(\d+)", re.IGNORECASE)


def to_strptime_format(fmt: str) -> str:
    """moment形式の日付フォーマット（YYYY-MM-DD等）をstrptime形式に変換"""
    escaped = fmt.replace("%", "%%")
    return _TOKEN_PATTERN.sub(lambda m: _TOKEN_MAP[m.group(0)], escaped)


def to_prefix_pattern(fmt: str) -> "re.Pattern[str]":
    """フォーマットに一致する先頭部分を取り出す正規表現（例: 2024-01-15 周一 → 2024-01-15）"""
    parts = []
    position = 0
    for match in _TOKEN_PATTERN.finditer(fmt):
        parts.append(re.escape(fmt[position : match.start()]))
        parts.append(_TOKEN_REGEX[match.group(0)])
        position = match.end()
    parts.append(re.escape(fmt[position:]))
    return re.compile("".join(parts))


class DateResolver:
    """ファイル名・本文から日記の日付を解決する"""

    def __init__(self, date_format: str = "YYYY-MM-DD"):
        self.date_format = date_format
        self._strptime_format = to_strptime_format(date_format)
        self._prefix_pattern = to_prefix_pattern(date_format)

    def resolve(self, identifier: str, body: str) -> datetime:
        """
        日付を解決する（失敗しても現在時刻を返し、例外は出さない）

        Args:
            identifier: ファイル名などの識別子
            body: 日記本文

        Returns:
            解決した日付
        """
        stem = self._strip_identifier(identifier)
        parsed = self._parse_stem(stem)
        if parsed is not None:
            return parsed

        match = _BODY_DATE_PATTERN.search(body or "")
        if match:
            try:
                return datetime.strptime(match.group(1).replace("/", "-"), "%Y-%m-%d")
            except ValueError:
                logger.debug(f"Invalid date in body: {match.group(1)}")

        logger.debug(f"No date found for {identifier!r}, falling back to now")
        return datetime.now()

    def _parse_stem(self, stem: str) -> Optional[datetime]:
        """ファイル名全体、次にフォーマットに一致する先頭部分で日付を読む（後ろの文字は無視）"""
        try:
            return datetime.strptime(stem, self._strptime_format)
        except ValueError:
            pass

        prefix = self._prefix_pattern.match(stem)
        if prefix:
            try:
                return datetime.strptime(prefix.group(0), self._strptime_format)
            except ValueError:
                logger.debug(f"Invalid date in identifier: {prefix.group(0)}")
        return None

    @staticmethod
    def _strip_identifier(identifier: str) -> str:
        """パスの最後の要素から拡張子を取り除く"""
        name = re.split(r"[\\/]", identifier or "")[-1]
        return _EXTENSION_PATTERN.sub("", name)


def resolve_date(identifier: str, date_format: str, body: str) -> datetime:
    """DateResolver.resolve のショートカット"""
    return DateResolver(date_format).resolve(identifier, body)


class MetadataExtractor:
    """本文からタイトル・タグ・心情値を抽出する"""

    def extract(self, body: str) -> DiaryMetadata:
        body = body or ""

        title = None
        title_match = _TITLE_PATTERN.search(body)
        if title_match:
            title = title_match.group(1).strip()

        tags = [match.group(1) for match in _TAG_PATTERN.finditer(body)]

        mood_override = None
        mood_match = MOOD_MARKER_PATTERN.search(body)
        if mood_match:
            mood_override = int(mood_match.group(1))

        return DiaryMetadata(title=title, tags=tags, mood_override=mood_override)


class DiaryParser:
    """日記ファイルのスキャン・パース"""

    def __init__(
        self,
        store: Optional[DiaryFileStore] = None,
        date_format: str = "YYYY-MM-DD",
    ):
        """
        初期化

        Args:
            store: 日記ファイルストア（テキストだけを扱う場合は不要）
            date_format: ファイル名の日付フォーマット（moment形式）
        """
        self.store = store
        self.date_resolver = DateResolver(date_format)
        self.metadata_extractor = MetadataExtractor()

    def scan(self) -> List[str]:
        """日記フォルダ内の日記ファイル識別子を列挙"""
        return self._require_store().list_entries()

    def parse_text(self, identifier: str, text: str) -> DiaryRecord:
        """テキスト1件をレコード化"""
        return DiaryRecord(
            date=self.date_resolver.resolve(identifier, text),
            text=text,
            metadata=self.metadata_extractor.extract(text),
            source=identifier,
        )

    def parse_file(self, identifier: str) -> DiaryRecord:
        """ストアから1件読み込んでレコード化"""
        text = self._require_store().read_text(identifier)
        return self.parse_text(identifier, text)

    def parse_multiple(self, identifiers: Iterable[str]) -> List[DiaryRecord]:
        """
        複数の日記ファイルを一括パース

        読み込み・パースに失敗したファイルはログを出して除外し、処理を続ける。
        """
        records: List[DiaryRecord] = []
        for identifier in identifiers:
            try:
                records.append(self.parse_file(identifier))
            except Exception as e:
                logger.error(f"Error parsing file {identifier}: {e}")
        return records

    def _require_store(self) -> DiaryFileStore:
        if self.store is None:
            raise RuntimeError("DiaryParser has no file store configured")
        return self.store


DateBound = Union[str, date, None]


def _bound_to_iso(bound: DateBound) -> str:
    if bound is None:
        return ""
    if isinstance(bound, date):
        return bound.strftime("%Y-%m-%d")
    return bound.strip()


def filter_records_by_date(
    records: Iterable[DiaryRecord], start: DateBound = None, end: DateBound = None
) -> List[DiaryRecord]:
    """
    日付範囲（両端を含む）でレコードを絞り込む

    Args:
        records: 日記レコード
        start: 開始日（YYYY-MM-DD文字列またはdate、空/None=下限なし）
        end: 終了日（同上、空/None=上限なし）

    Returns:
        範囲内のレコード
    """
    start_iso = _bound_to_iso(start)
    end_iso = _bound_to_iso(end)
    filtered = []
    for record in records:
        day = record.date.strftime("%Y-%m-%d")
        if start_iso and day < start_iso:
            continue
        if end_iso and day > end_iso:
            continue
        filtered.append(record)
    return filtered
