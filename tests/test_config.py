"""
設定管理のテスト
"""

import logging
from pathlib import Path

import pytest

from src.diary_analyzer.config import DEFAULT_CONFIG_PATH, Config
from src.diary_analyzer.exceptions import ConfigurationError
from src.diary_analyzer.logger import setup_logger


def test_defaults():
    config = Config()

    assert config.diary_folder == "diary"
    assert config.date_format == "YYYY-MM-DD"
    assert config.backend.kind == "none"
    assert config.analysis.max_keywords == 5
    assert config.analysis.mood_score_range == (1, 5)
    assert config.export.timeline_filename == "时间线.md"


def test_from_yaml(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
diary_folder: 日记
date_format: YYYYMMDD
analyze_range:
  start: "2024-01-01"
  end: ""
backend:
  kind: local
  ollama_model: qwen2
analysis:
  max_keywords: 3
  mood_score_range: [2, 4]
  custom_tags: [工作, 学习]
log:
  level: DEBUG
""",
        encoding="utf-8",
    )

    config = Config.from_yaml(config_file)

    assert config.diary_folder == "日记"
    assert config.date_format == "YYYYMMDD"
    assert config.analyze_range.start == "2024-01-01"
    assert config.backend.kind == "local"
    assert config.backend.ollama_model == "qwen2"
    assert config.analysis.max_keywords == 3
    assert config.analysis.mood_score_range == (2, 4)
    assert config.analysis.custom_tags == ("工作", "学习")
    assert config.log_level == "DEBUG"


def test_sample_config_loads():
    config = Config.from_yaml(Path(__file__).parent.parent / "config" / "app_config.yaml")
    assert config.backend.kind == "none"


def test_default_path_does_not_depend_on_cwd(tmp_path, monkeypatch):
    """デフォルトの設定ファイルはプロジェクトルートから探す"""
    monkeypatch.chdir(tmp_path)

    assert DEFAULT_CONFIG_PATH.is_file()
    expected = Path(__file__).parent.parent / "config" / "app_config.yaml"
    assert DEFAULT_CONFIG_PATH.resolve() == expected.resolve()
    assert Config.from_yaml().export.timeline_filename == "时间线.md"


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_yaml(tmp_path / "missing.yaml")


def test_from_yaml_not_a_mapping(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Config.from_yaml(config_file)


def test_load_without_file_uses_defaults(tmp_path):
    assert Config.load(tmp_path / "missing.yaml") == Config()


@pytest.mark.parametrize(
    "data",
    [
        {"backend": {"kind": "cloud"}},
        {"analysis": {"max_keywords": 0}},
        {"analysis": {"max_concurrency": 0}},
        {"analysis": {"mood_score_range": [4, 2]}},
        {"analysis": {"mood_score_range": [0, 5]}},
        {"analysis": {"mood_score_range": "high"}},
    ],
)
def test_invalid_values(data):
    with pytest.raises(ConfigurationError):
        Config.from_dict(data)


def test_config_is_immutable():
    config = Config()
    with pytest.raises(AttributeError):
        config.diary_folder = "other"


def test_with_backend_returns_new_instance():
    config = Config()
    remote = config.with_backend("remote")

    assert remote.backend.kind == "remote"
    assert config.backend.kind == "none"


def test_from_env(monkeypatch):
    monkeypatch.setenv("DIARY_BACKEND", "local")
    monkeypatch.setenv("OLLAMA_MODEL", "qwen2")
    monkeypatch.setenv("DIARY_MAX_KEYWORDS", "7")

    config = Config.from_env()

    assert config.backend.kind == "local"
    assert config.backend.ollama_model == "qwen2"
    assert config.analysis.max_keywords == 7


def test_setup_logger_quiets_http_clients(tmp_path):
    log_file = tmp_path / "logs" / "app.log"

    logger = setup_logger(log_level="DEBUG", log_file=str(log_file))

    assert log_file.parent.is_dir()
    assert logger.name == "src"
    assert logging.getLogger("httpx").level == logging.WARNING
