"""パッケージ単位でグローバルflagsetの使用を解析する。"""

from typing import List

from ..models.package import Package, SourceFile
from ..models.problem import Problem
from ..utils.logger import get_logger
from .call_scanner import CallSiteScanner
from .import_resolver import DotImportGuard, resolve_flag_import


class PackageGate:
    """解析対象から除外するパッケージを判定する。

    エントリーポイント（package main）はグローバルflagsetの所有者であるため、
    ドットインポートのチェックも含めてすべてのチェックを免除する。
    """

    def is_exempt(self, package: Package) -> bool:
        """パッケージが解析を免除されるかを判定する。

        Args:
            package: 判定対象のパッケージ

        Returns:
            エントリーポイントの場合True
        """
        return package.is_entry_point


class PackageAnalyzer:
    """1つのGoパッケージを解析し、Problemのリストを返す。

    解析は入力パッケージのみに依存する純粋な処理であり、
    複数パッケージを並列に解析しても結果は変わらない。
    """

    def __init__(self, verbosity: int = 0):
        """パッケージ解析器を初期化する。

        Args:
            verbosity: ログ出力の閾値
        """
        self.verbosity = verbosity
        self.logger = get_logger(__name__, verbosity)
        self.gate = PackageGate()
        self.dot_import_guard = DotImportGuard()

    def analyze(self, package: Package) -> List[Problem]:
        """パッケージ内の全ファイルを解析する。

        Args:
            package: ローダーが生成したパッケージ

        Returns:
            ファイル順・ソース位置順のProblemリスト
        """
        if self.gate.is_exempt(package):
            self.logger.debug(f"{package.import_path} is package main, skipping")
            return []

        problems: List[Problem] = []
        imports_flag = False

        for source_file in package.files:
            self.logger.debug(f"processing {source_file.path}")
            resolution = resolve_flag_import(source_file.imports)

            dot_import_problem = self.dot_import_guard.check(
                resolution, package.import_path
            )
            if dot_import_problem is not None:
                self.logger.debug(
                    f"{source_file.path} dot-imports flag, skipping call analysis"
                )
                problems.append(dot_import_problem)
                continue

            if not resolution.is_visible:
                continue

            if not imports_flag:
                # パッケージごとに1回だけ出力
                self.logger.debug(f"package {package.import_path} imports flag")
                imports_flag = True

            problems.extend(self._scan_file(source_file, resolution.alias, package))

        if not imports_flag:
            self.logger.debug(f"package {package.import_path} does not import flag")

        return problems

    def _scan_file(
        self,
        source_file: SourceFile,
        alias: str,
        package: Package
    ) -> List[Problem]:
        scanner = CallSiteScanner(source_file, alias, package.import_path)
        problems = scanner.scan()
        for problem in problems:
            self.logger.debug(f"{problem.position}: {problem.message}")
        return problems
