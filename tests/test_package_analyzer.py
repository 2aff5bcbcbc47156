"""PackageAnalyzerとPackageGateのテスト。"""

import logging

import pytest

from mainflags.analyzer.package_analyzer import PackageAnalyzer, PackageGate
from mainflags.models.package import Package
from mainflags.models.problem import ALLOWED_FLAG_FUNCTIONS

DOT_IMPORT = "package flag should not be dot-imported"


class TestPackageGate:
    """PackageGateのテスト。"""

    def test_main_is_exempt(self):
        assert PackageGate().is_exempt(Package("main", "example.com/cmd", "."))

    def test_library_is_not_exempt(self):
        assert not PackageGate().is_exempt(Package("lib", "example.com/lib", "."))


class TestScenarios:
    """代表的なパッケージでの解析結果のテスト。"""

    def test_top_level_flag_var(self, make_package):
        """Scenario A: ライブラリのトップレベルでflag.Intを使用。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import "flag"\n'
            '\n'
            'var one = flag.Int("one", 1, "one")\n'
        )

        problems = PackageAnalyzer().analyze(package)

        assert [p.message for p in problems] == [
            "flag.Int should not be used on the global flagset",
        ]
        assert problems[0].package == "example.com/lib"

    def test_aliased_import(self, make_package):
        """Scenario B: エイリアスffで3回呼び出し。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import ff "flag"\n'
            '\n'
            'var (\n'
            '\tone   = ff.Int("one", 1, "one")\n'
            '\ttwo   = ff.Int("two", 2, "two")\n'
            '\tthree = ff.Int("three", 3, "three")\n'
            ')\n'
        )

        problems = PackageAnalyzer().analyze(package)

        assert [p.message for p in problems] == [
            "ff.Int should not be used on the global flagset",
        ] * 3

    def test_scoped_flagset(self, make_package):
        """Scenario C: 引数のFlagSetに登録する正しい使い方。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import "flag"\n'
            '\n'
            'var a string\n'
            '\n'
            'func AddFlags(fs *flag.FlagSet) {\n'
            '\tfs.StringVar(&a, "a", "a", "a")\n'
            '}\n'
        )

        assert PackageAnalyzer().analyze(package) == []

    def test_dot_import_suppresses_call_scan(self, make_package):
        """Scenario D: ドットインポートのファイルはProblem1件のみ。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import . "flag"\n'
            '\n'
            'var one = flag.Int("one", 1, "one")\n'
            'var two = Int("two", 2, "two")\n'
        )

        problems = PackageAnalyzer().analyze(package)

        assert [p.message for p in problems] == [DOT_IMPORT]
        assert (problems[0].position.line, problems[0].position.column) == (3, 8)

    def test_main_package_is_exempt(self, make_package):
        """Scenario E: package mainは問題なし。"""
        package = make_package(
            'package main\n'
            '\n'
            'import "flag"\n'
            '\n'
            'var one = flag.Int("one", 1, "one")\n'
            '\n'
            'func main() {\n'
            '\tfour := flag.Int("four", 4, "four")\n'
            '\tflag.Parse()\n'
            '\t_ = four\n'
            '}\n'
        )

        assert PackageAnalyzer().analyze(package) == []

    def test_main_package_dot_import_is_exempt(self, make_package):
        """package mainではドットインポートも報告しない。"""
        package = make_package(
            'package main\n'
            '\n'
            'import . "flag"\n'
            '\n'
            'func main() {\n'
            '\tParse()\n'
            '}\n'
        )

        assert PackageAnalyzer().analyze(package) == []

    def test_function_scope_with_parse(self, make_package):
        """Scenario F: 関数内のflag.Stringのみ報告し、flag.Parseは許可。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import (\n'
            '\t"flag"\n'
            '\t"fmt"\n'
            ')\n'
            '\n'
            'func x() {\n'
            '\tone := flag.String("one", "one", "one")\n'
            '\tflag.Parse()\n'
            '\tfmt.Println(*one)\n'
            '}\n'
        )

        problems = PackageAnalyzer().analyze(package)

        assert [p.message for p in problems] == [
            "flag.String should not be used on the global flagset",
        ]

    def test_blank_import(self, make_package):
        """ブランクインポートは問題にならない。"""
        package = make_package(
            'package lib\n'
            '\n'
            'import _ "flag"\n'
        )

        assert PackageAnalyzer().analyze(package) == []

    @pytest.mark.parametrize("member", sorted(ALLOWED_FLAG_FUNCTIONS))
    def test_allowed_members_yield_nothing(self, make_package, member):
        """許可リストの関数はどのエイリアスでも問題なし。"""
        for alias in ("flag", "gflag"):
            package = make_package(
                'package lib\n'
                '\n'
                f'import {alias} "flag"\n'
                '\n'
                'func f() {\n'
                f'\t{alias}.{member}()\n'
                '}\n'
            )
            assert PackageAnalyzer().analyze(package) == []


class TestMultipleFiles:
    """複数ファイルのパッケージのテスト。"""

    def _package(self, go_parser, sources):
        files = [
            go_parser.parse_string(source, name)
            for name, source in sources
        ]
        return Package("lib", "example.com/lib", ".", files)

    def test_resolution_is_file_local(self, go_parser):
        """エイリアスとドットインポートはファイルごとに解決する。"""
        package = self._package(go_parser, [
            ("a.go", 'package lib\n\nimport . "flag"\n\nvar a = Int("a", 1, "a")\n'),
            ("b.go", 'package lib\n\nimport ff "flag"\n\nvar b = ff.Int("b", 1, "b")\n'),
            ("c.go", 'package lib\n\nimport "fmt"\n\nvar c = flag.Int("c", 1, "c")\nvar _ = fmt.Sprint\n'),
        ])

        problems = PackageAnalyzer().analyze(package)

        assert [(p.position.filename, p.message) for p in problems] == [
            ("a.go", DOT_IMPORT),
            ("b.go", "ff.Int should not be used on the global flagset"),
        ]

    def test_logs_flag_import_once(self, go_parser, caplog):
        """flagをimportしているログはパッケージごとに1回。"""
        source = 'package lib\n\nimport "flag"\n\nvar a = flag.Parsed()\n'
        package = self._package(go_parser, [("a.go", source), ("b.go", source)])

        with caplog.at_level(logging.DEBUG, logger="mainflags"):
            PackageAnalyzer(verbosity=30).analyze(package)

        messages = [r.getMessage() for r in caplog.records]
        assert messages.count("package example.com/lib imports flag") == 1

    def test_logs_nothing_below_threshold(self, go_parser, caplog):
        """verbosityが低い場合はデバッグログを出力しない。"""
        source = 'package lib\n\nimport "flag"\n'
        package = self._package(go_parser, [("a.go", source)])

        with caplog.at_level(logging.DEBUG, logger="mainflags"):
            PackageAnalyzer(verbosity=0).analyze(package)

        assert not [r for r in caplog.records if r.name.startswith("mainflags.analyzer.package")]
