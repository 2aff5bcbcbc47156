"""ホスト（メタリンターなど）から呼び出すプラグイン形式のmainflags。

ホストは :class:`Analyzer` を生成し、パッケージごとに :class:`Pass` を渡して
:meth:`Analyzer.run` を呼ぶ。Problem1件ごとに ``report`` コールバックへ
:class:`Diagnostic` が1件渡される。
"""

from dataclasses import dataclass
from typing import Callable

from .analyzer.package_analyzer import PackageAnalyzer
from .models.package import Package
from .models.position import Position

DOC = """check that the global flagset is only used by package main

Library packages should define flags on a *flag.FlagSet they own and
accept from their caller, instead of registering them on the process-wide
flag.CommandLine. Read-only functions such as flag.Parse, flag.Args and
flag.Lookup are allowed. Dot-importing package flag is reported because
flag usage can no longer be told apart from other identifiers."""


@dataclass(frozen=True)
class Diagnostic:
    """ホストに報告する問題。"""
    position: Position
    message: str


@dataclass
class Pass:
    """1パッケージに対する1回の解析呼び出し。"""
    package: Package
    report: Callable[[Diagnostic], None]


class Analyzer:
    """ホスト連携用のmainflagsチェック。"""

    name = "mainflags"
    doc = DOC

    def __init__(self, verbosity: int = 0):
        self.verbosity = verbosity
        self._core = PackageAnalyzer(verbosity=verbosity)

    def run(self, pass_: Pass) -> int:
        """``pass_.package`` を解析し、各問題をホストに報告する。

        Returns:
            報告したDiagnosticの件数
        """
        problems = self._core.analyze(pass_.package)
        for problem in problems:
            pass_.report(Diagnostic(position=problem.position, message=problem.message))
        return len(problems)
