"""Problemの収集・並べ替え・テキスト出力。"""

from typing import Dict, Iterable, List, Optional, TextIO, Tuple
import logging
import os
import threading

from ..models.package import Package
from ..models.problem import Problem

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PROBLEMS = 2


def import_order_key(import_path: str) -> Tuple[bool, str]:
    """goimportsと同じ順序のソートキーを返す。

    先頭要素にドットを含まない標準ライブラリのパッケージを先に、
    それ以外のパッケージを後に並べ、それぞれをアルファベット順にする。
    自モジュールのパッケージはサードパーティと区別しない。
    """
    first = import_path.split("/", 1)[0]
    return ("." in first, import_path)


def sort_packages(packages: Iterable[Package]) -> List[Package]:
    """``import_order_key`` の順に並べたパッケージを返す。"""
    return sorted(packages, key=lambda pkg: import_order_key(pkg.import_path))


def relative_filename(filename: str, cwd: Optional[str] = None) -> str:
    """``cwd`` からの相対パスを返す。相対化できない場合はそのまま返す。"""
    try:
        return os.path.relpath(filename, cwd or os.getcwd())
    except ValueError:
        # Windowsで別ドライブの場合など
        return filename


def format_problem(problem: Problem, cwd: Optional[str] = None) -> str:
    """Problemを ``file:line:column: message`` 形式に整形する。"""
    position = problem.position
    filename = relative_filename(position.filename, cwd)
    return f"{filename}:{position.line}:{position.column}: {problem.message}"


class ProblemCollector:
    """パッケージ順をキーにProblemを蓄積する。追記のみでスレッドセーフ。"""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_index: Dict[int, List[Problem]] = {}

    def add(self, index: int, problems: Iterable[Problem]) -> None:
        """``index`` 番目のパッケージのProblemを追加する。"""
        with self._lock:
            self._by_index.setdefault(index, []).extend(problems)

    def problems(self) -> List[Problem]:
        """パッケージ順、次に検出順で並べた全Problemを返す。"""
        with self._lock:
            return [
                problem
                for index in sorted(self._by_index)
                for problem in self._by_index[index]
            ]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(p) for p in self._by_index.values())


class Reporter:
    """Problemをストリームに出力し、終了コードを決める。"""

    def __init__(self, stream: TextIO, cwd: Optional[str] = None):
        self.stream = stream
        self.cwd = cwd or os.getcwd()

    def report(self, problems: List[Problem]) -> int:
        """全Problemを出力し、終了コードを返す。

        Args:
            problems: 実行全体のProblem（出力順）

        Returns:
            問題がなければEXIT_OK、あればEXIT_PROBLEMS
        """
        if not problems:
            logger.info("no problems found")
            return EXIT_OK

        for problem in problems:
            self.stream.write(format_problem(problem, self.cwd) + "\n")

        logger.info(f"{len(problems)} problems found")
        return EXIT_PROBLEMS
