"""flagパッケージのimport解決のテスト。"""

from mainflags.analyzer.import_resolver import (
    DotImportGuard,
    ImportResolution,
    Visibility,
    resolve_flag_import,
)
from mainflags.models.package import ImportDeclaration
from mainflags.models.position import Position
from mainflags.models.problem import CheckType


def _imp(path, alias=None, line=3):
    return ImportDeclaration(path=path, alias=alias, position=Position("a.go", line, 8))


class TestResolveFlagImport:
    """resolve_flag_importのテスト。"""

    def test_no_imports(self):
        """importがない場合はNOT_VISIBLE。"""
        assert resolve_flag_import([]).visibility is Visibility.NOT_VISIBLE

    def test_other_imports_only(self):
        """flag以外のimportのみの場合はNOT_VISIBLE。"""
        result = resolve_flag_import([_imp("fmt"), _imp("os")])
        assert result.visibility is Visibility.NOT_VISIBLE
        assert result.declaration is None

    def test_default_name(self):
        """エイリアスなしの場合はflagとして見える。"""
        result = resolve_flag_import([_imp("fmt"), _imp("flag")])
        assert result.is_visible
        assert result.alias == "flag"

    def test_explicit_alias(self):
        """エイリアス付きの場合はそのエイリアスで見える。"""
        result = resolve_flag_import([_imp("flag", "ff")])
        assert result == ImportResolution.visible_as("ff", _imp("flag", "ff"))

    def test_dot_import(self):
        """ドットインポートの場合はDOT_IMPORTED。"""
        result = resolve_flag_import([_imp("flag", ".")])
        assert result.is_dot_imported
        assert result.alias is None

    def test_blank_import_is_not_visible(self):
        """ブランクインポートは照合できる名前がないのでNOT_VISIBLE。"""
        result = resolve_flag_import([_imp("flag", "_")])
        assert result.visibility is Visibility.NOT_VISIBLE
        assert result.declaration == _imp("flag", "_")

    def test_exact_path_match_only(self):
        """パスの前方・後方一致は対象外。"""
        result = resolve_flag_import([
            _imp("github.com/spf13/pflag"),
            _imp("flag/extra"),
            _imp("myflag"),
        ])
        assert result.visibility is Visibility.NOT_VISIBLE

    def test_first_match_wins(self):
        """同一パスが複数ある場合は最初のimportを使用する。"""
        result = resolve_flag_import([_imp("flag", "a"), _imp("flag", ".")])
        assert result.alias == "a"


class TestDotImportGuard:
    """DotImportGuardのテスト。"""

    def test_reports_dot_import_at_import_position(self):
        """ドットインポートの位置にProblemを1件返す。"""
        imports = [_imp("flag", ".", line=4)]
        problem = DotImportGuard().check(
            resolve_flag_import(imports), "example.com/lib"
        )

        assert problem is not None
        assert problem.message == "package flag should not be dot-imported"
        assert problem.position == Position("a.go", 4, 8)
        assert problem.package == "example.com/lib"
        assert problem.check is CheckType.DOT_IMPORT

    def test_no_problem_for_regular_import(self):
        """通常のimportではNoneを返す。"""
        imports = [_imp("flag")]
        assert DotImportGuard().check(
            resolve_flag_import(imports), "example.com/lib"
        ) is None
