"""設定管理モジュール。"""

from dataclasses import dataclass, field
from typing import List, Optional, Any, Dict
import os
import logging

import yaml

logger = logging.getLogger(__name__)

VERBOSITY_ENV = "MAINFLAGS_VERBOSITY"


class ConfigError(Exception):
    """設定ファイルの読み込みエラー。"""
    pass


@dataclass
class Config:
    """アプリケーション設定。"""

    # ログ出力の閾値（負の値で無効）
    verbosity: int = 0
    log_file: Optional[str] = None

    # 解析対象のパッケージパターン
    packages: List[str] = field(default_factory=lambda: ["."])

    # 並列に解析するパッケージ数
    jobs: int = 1

    # Excelレポートの出力先（省略可）
    excel_output: Optional[str] = None

    @classmethod
    def from_yaml(cls, file_path: str) -> "Config":
        """YAMLファイルから設定を読み込む。

        Args:
            file_path: YAML設定ファイルのパス

        Returns:
            Configインスタンス

        Raises:
            ConfigError: 読み込みまたはパースに失敗した場合
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {file_path} must be a mapping")

        config = cls.from_dict(data)
        config.apply_env()

        logger.info(f"Configuration loaded from {file_path}")
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """辞書から設定を作成する。未知のキーは無視する。

        Args:
            data: 設定辞書

        Returns:
            Configインスタンス
        """
        config = cls()

        for key, value in data.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")

        if isinstance(config.packages, str):
            config.packages = [config.packages]

        return config

    def apply_env(self) -> None:
        """環境変数で設定を上書きする。"""
        value = os.getenv(VERBOSITY_ENV)
        if value is None:
            return

        try:
            self.verbosity = int(value)
        except ValueError:
            logger.warning(f"Ignoring invalid {VERBOSITY_ENV}={value!r}")

    def validate(self) -> List[str]:
        """設定を検証する。

        Returns:
            検証エラーのリスト（有効な場合は空）
        """
        errors = []

        if not isinstance(self.verbosity, int):
            errors.append(f"verbosity must be an integer: {self.verbosity!r}")
        if not isinstance(self.jobs, int) or self.jobs < 1:
            errors.append(f"jobs must be a positive integer: {self.jobs!r}")
        if not self.packages:
            errors.append("packages must not be empty")
        if self.excel_output and not str(self.excel_output).endswith(".xlsx"):
            errors.append(f"excel_output must be an .xlsx file: {self.excel_output}")

        return errors
