"""ロギング設定モジュール。"""

import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional, TextIO

# ロギング無効時に使用するレベル（CRITICALより上）
DISABLED = logging.CRITICAL + 10


class LogLevel(IntEnum):
    """verbosity値の閾値。

    負の値はロギング無効、LogLevel.ERROR以上LogLevel.WARNING未満はエラーのみ。
    """
    ERROR = 0
    WARNING = 10
    INFO = 20
    DEBUG = 30


def verbosity_to_level(verbosity: int) -> int:
    """verbosity値をloggingのレベルに変換する。

    Args:
        verbosity: コマンドラインまたは設定で指定されたverbosity

    Returns:
        loggingモジュールのレベル値
    """
    if verbosity < LogLevel.ERROR:
        return DISABLED
    if verbosity < LogLevel.WARNING:
        return logging.ERROR
    if verbosity < LogLevel.INFO:
        return logging.WARNING
    if verbosity < LogLevel.DEBUG:
        return logging.INFO
    return logging.DEBUG


class VerbosityAdapter(logging.LoggerAdapter):
    """verbosity閾値を明示的に保持するロガーアダプター。

    プロセス全体のロガー設定とは別に、解析器ごとに渡された閾値で出力を絞る。
    """

    def __init__(self, logger: logging.Logger, verbosity: int):
        super().__init__(logger, {})
        self.verbosity = verbosity
        self.threshold = verbosity_to_level(verbosity)

    def isEnabledFor(self, level: int) -> bool:
        if level < self.threshold:
            return False
        return self.logger.isEnabledFor(level)


def get_logger(name: str, verbosity: int) -> VerbosityAdapter:
    """verbosity付きのロガーを取得する。

    Args:
        name: ロガー名（通常は ``__name__``）
        verbosity: verbosity値

    Returns:
        VerbosityAdapter
    """
    return VerbosityAdapter(logging.getLogger(name), verbosity)


def setup_logging(
    level: int = logging.ERROR,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """ロギング設定をセットアップする。

    標準出力は問題の出力に使うため、コンソールハンドラーは標準エラーに出力する。

    Args:
        level: ロギングレベル（``verbosity_to_level`` の戻り値）
        log_file: ログファイルへのパス（省略可）
        format_string: カスタムフォーマット文字列（省略可）
        stream: コンソール出力先（省略時は標準エラー）

    Returns:
        ルートロガー
    """
    # デフォルトフォーマット
    if format_string is None:
        format_string = "%(levelname).1s %(name)s: %(message)s"

    formatter = logging.Formatter(format_string)

    # ルートロガーを設定
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 既存のハンドラーを削除
    root_logger.handlers.clear()

    # コンソールハンドラー
    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # ファイルハンドラー（指定された場合）
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_path,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger
