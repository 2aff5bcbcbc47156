"""mainflagsのメインエントリーポイント。

package main以外のGoパッケージがグローバルflagsetを変更していないかを検査する。
終了コードは 0: 問題なし、2: 問題あり、1: パッケージ読み込み失敗。
"""

import argparse
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, TextIO
import logging

from .analyzer.package_analyzer import PackageAnalyzer
from .config import Config, ConfigError
from .io.excel_writer import ExcelWriter
from .io.package_loader import LoadError, PackageLoader
from .io.reporter import (
    EXIT_FATAL,
    ProblemCollector,
    Reporter,
    sort_packages,
)
from .models.package import Package
from .models.problem import Problem
from .utils.logger import setup_logging, verbosity_to_level

logger = logging.getLogger(__name__)

VERBOSITY_HELP = (
    "ログ出力の詳細度。golangci-lintで使う場合は 0 <= x < 10 とする。"
    "負の値でログ出力を完全に無効にする"
)


@dataclass
class RunStats:
    """実行統計情報。"""
    packages: int = 0
    skipped: int = 0
    files: int = 0
    problems: int = 0


def run(
    stream: TextIO,
    packages: List[Package],
    config: Optional[Config] = None,
    cwd: Optional[str] = None
) -> int:
    """読み込み済みパッケージを解析し、問題を出力する。

    Args:
        stream: 問題の出力先
        packages: 解析するパッケージ（出力順）
        config: アプリケーション設定
        cwd: 出力パスを相対化する基準ディレクトリ

    Returns:
        終了コード
    """
    config = config or Config()
    analyzer = PackageAnalyzer(verbosity=config.verbosity)
    collector = ProblemCollector()

    if config.jobs > 1 and len(packages) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as executor:
            futures = {
                executor.submit(analyzer.analyze, package): index
                for index, package in enumerate(packages)
            }
            for future in as_completed(futures):
                collector.add(futures[future], future.result())
    else:
        for index, package in enumerate(packages):
            collector.add(index, analyzer.analyze(package))

    problems = collector.problems()
    _log_statistics(_collect_stats(packages, problems))

    if config.excel_output:
        writer = ExcelWriter(config.excel_output)
        writer.write_problems(problems, cwd)
        writer.write_summary(problems)

    return Reporter(stream, cwd).report(problems)


def _collect_stats(packages: List[Package], problems: List[Problem]) -> RunStats:
    return RunStats(
        packages=len(packages),
        skipped=sum(1 for package in packages if package.is_entry_point),
        files=sum(len(package.files) for package in packages),
        problems=len(problems),
    )


def _log_statistics(stats: RunStats) -> None:
    """実行統計をログ出力する。"""
    logger.debug(
        f"Analyzed {stats.packages} packages ({stats.files} files), "
        f"skipped {stats.skipped} main packages, "
        f"found {stats.problems} problems"
    )


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを構築する。"""
    parser = argparse.ArgumentParser(
        prog="mainflags",
        description="グローバルflagsetをpackage mainだけが使用しているか検査するツール"
    )
    parser.add_argument(
        "packages",
        nargs="*",
        help="解析するGoパッケージ（省略時は .）"
    )
    parser.add_argument(
        "--verbosity",
        type=int,
        help=VERBOSITY_HELP
    )
    parser.add_argument(
        "-c", "--config",
        help="YAML設定ファイルパス"
    )
    parser.add_argument(
        "--log-file",
        help="ログファイルパス"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="並列に解析するパッケージ数"
    )
    parser.add_argument(
        "--excel",
        metavar="PATH",
        help="問題をExcelファイルにも出力する"
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """設定ファイルとコマンドライン引数から設定を構築する。

    コマンドライン引数は設定ファイルの値より優先される。

    Raises:
        ConfigError: 設定ファイルを読み込めない場合
    """
    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config()
        config.apply_env()

    if args.packages:
        config.packages = list(args.packages)
    if args.verbosity is not None:
        config.verbosity = args.verbosity
    if args.log_file:
        config.log_file = args.log_file
    if args.jobs is not None:
        config.jobs = args.jobs
    if args.excel:
        config.excel_output = args.excel

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """メインエントリーポイント。

    Returns:
        終了コード
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        _fatal(str(e))
        return EXIT_FATAL

    errors = config.validate()
    if errors:
        for error in errors:
            _fatal(f"Configuration error: {error}")
        return EXIT_FATAL

    setup_logging(level=verbosity_to_level(config.verbosity), log_file=config.log_file)

    logger.debug("begin program load")
    try:
        packages = PackageLoader().load(config.packages)
    except LoadError as e:
        _fatal(f"cannot load program; err = {e}")
        return EXIT_FATAL
    logger.debug("end program load")

    return run(sys.stdout, sort_packages(packages), config)


def _fatal(message: str) -> None:
    # 致命的なエラーはverbosityに関係なく常に出力する
    print(message, file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
