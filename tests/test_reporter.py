"""ProblemCollectorとReporterのテスト。"""

import io
import os
import threading

from mainflags.io.reporter import (
    EXIT_OK,
    EXIT_PROBLEMS,
    ProblemCollector,
    Reporter,
    format_problem,
    import_order_key,
    sort_packages,
)
from mainflags.models.package import Package
from mainflags.models.position import Position
from mainflags.models.problem import Problem


def _problem(filename, line=1, column=1, message="flag.Int should not be used on the global flagset"):
    return Problem(package="lib", position=Position(filename, line, column), message=message)


class TestImportOrder:
    """goimports順ソートのテスト。"""

    def _sorted(self, paths):
        packages = [Package("p", path, ".") for path in paths]
        return [p.import_path for p in sort_packages(packages)]

    def test_stdlib(self):
        assert self._sorted(["math/rand", "io", "crypto/rand"]) == [
            "crypto/rand",
            "io",
            "math/rand",
        ]

    def test_mixed(self):
        """標準ライブラリが先、サードパーティが後。"""
        assert self._sorted([
            "strings",
            "github.com/stretchr/testify",
            "gopkg.in/yaml.v3",
            "flag",
            "google.golang.org/grpc",
        ]) == [
            "flag",
            "strings",
            "github.com/stretchr/testify",
            "google.golang.org/grpc",
            "gopkg.in/yaml.v3",
        ]

    def test_key(self):
        assert import_order_key("fmt") == (False, "fmt")
        assert import_order_key("example.com/x") == (True, "example.com/x")


class TestFormatProblem:
    """Problemの整形のテスト。"""

    def test_relative_to_cwd(self, tmp_path):
        filename = str(tmp_path / "pkg" / "a.go")
        line = format_problem(_problem(filename, 6, 10), cwd=str(tmp_path))
        assert line == os.path.join("pkg", "a.go") + ":6:10: flag.Int should not be used on the global flagset"


class TestProblemCollector:
    """ProblemCollectorのテスト。"""

    def test_orders_by_package_index(self):
        collector = ProblemCollector()
        collector.add(2, [_problem("c.go")])
        collector.add(0, [_problem("a.go", 1), _problem("a.go", 2)])
        collector.add(1, [])

        assert [(p.position.filename, p.position.line) for p in collector.problems()] == [
            ("a.go", 1), ("a.go", 2), ("c.go", 1),
        ]
        assert len(collector) == 3

    def test_concurrent_adds(self):
        """複数スレッドから追加しても順序は変わらない。"""
        collector = ProblemCollector()
        threads = [
            threading.Thread(target=collector.add, args=(i, [_problem(f"{i:02d}.go")]))
            for i in reversed(range(20))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert [p.position.filename for p in collector.problems()] == [
            f"{i:02d}.go" for i in range(20)
        ]


class TestReporter:
    """Reporterのテスト。"""

    def test_no_problems(self):
        buf = io.StringIO()
        assert Reporter(buf).report([]) == EXIT_OK
        assert buf.getvalue() == ""

    def test_problems_found(self, tmp_path):
        buf = io.StringIO()
        problems = [
            _problem(str(tmp_path / "a.go"), 3, 8, "package flag should not be dot-imported"),
            _problem(str(tmp_path / "b.go"), 6, 10),
        ]

        assert Reporter(buf, cwd=str(tmp_path)).report(problems) == EXIT_PROBLEMS
        assert buf.getvalue().splitlines() == [
            "a.go:3:8: package flag should not be dot-imported",
            "b.go:6:10: flag.Int should not be used on the global flagset",
        ]
