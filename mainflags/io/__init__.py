"""Goソースの読み込みと解析結果の出力モジュール。"""

from .go_parser import GoParser, GoParseError
from .package_loader import LoadError, PackageLoader
from .reporter import (
    EXIT_FATAL,
    EXIT_OK,
    EXIT_PROBLEMS,
    ProblemCollector,
    Reporter,
    format_problem,
    sort_packages,
)
from .excel_writer import ExcelWriter

__all__ = [
    "GoParser",
    "GoParseError",
    "LoadError",
    "PackageLoader",
    "EXIT_FATAL",
    "EXIT_OK",
    "EXIT_PROBLEMS",
    "ProblemCollector",
    "Reporter",
    "format_problem",
    "sort_packages",
    "ExcelWriter",
]
