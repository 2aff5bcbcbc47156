"""ユーティリティモジュール。"""

from .logger import LogLevel, get_logger, setup_logging, verbosity_to_level

__all__ = ["LogLevel", "get_logger", "setup_logging", "verbosity_to_level"]
