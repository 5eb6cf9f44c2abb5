"""
日記ファイルストア

ローカルディレクトリ上の日記フォルダを扱う薄いI/O層。
解析コアはここから渡される識別子（相対パス文字列）以外のパス処理をしない。
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


class DiaryFileStore:
    """ディレクトリベースの日記ファイルストア"""

    def __init__(
        self,
        root: Union[str, Path] = ".",
        diary_folder: str = "diary",
        extension: str = ".md",
        exclude: Iterable[str] = (),
    ):
        """
        Args:
            root: ボルト（作業ディレクトリ）のルート
            diary_folder: ルートからの日記フォルダ
            extension: 日記ファイルの拡張子
            exclude: 列挙から除外するファイル名（生成したタイムライン・レポート等）
        """
        self.root = Path(root)
        self.diary_folder = diary_folder
        self.extension = extension
        self.exclude = frozenset(exclude)

    @property
    def folder_path(self) -> Path:
        return self.root / self.diary_folder

    def list_entries(self, scope: Optional[str] = None) -> List[str]:
        """
        日記ファイルの識別子（ルートからの相対パス）を列挙

        Args:
            scope: 日記フォルダ内のサブフォルダ（Noneならフォルダ全体）

        Returns:
            ソート済みの識別子リスト
        """
        base = self.folder_path / scope if scope else self.folder_path
        if not base.exists():
            logger.warning(f"Diary folder not found: {base}")
            return []

        return sorted(
            path.relative_to(self.root).as_posix()
            for path in base.rglob(f"*{self.extension}")
            if path.is_file() and path.name not in self.exclude
        )

    def read_text(self, identifier: str) -> str:
        """識別子のファイルをUTF-8で読み込む"""
        with open(self.root / identifier, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, path: str, content: str) -> Path:
        """ルートからの相対パスに書き込む（既存ファイルは上書き）"""
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Wrote {target}")
        return target
