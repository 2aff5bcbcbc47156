"""ファイル単位でflagパッケージの可視性を解決する。"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..models.package import ImportDeclaration
from ..models.problem import (
    CheckType,
    DOT_IMPORT_MESSAGE,
    FLAG_PACKAGE_NAME,
    FLAG_PACKAGE_PATH,
    Problem,
)


class Visibility(Enum):
    """ファイル内でのflagパッケージの見え方。"""
    NOT_VISIBLE = "not-visible"
    VISIBLE = "visible"
    DOT_IMPORTED = "dot-imported"


@dataclass(frozen=True)
class ImportResolution:
    """import解決の結果。

    Attributes:
        visibility: 可視性
        alias: ``VISIBLE`` の場合のローカル名
        declaration: 該当するimport宣言（見つかった場合）
    """
    visibility: Visibility
    alias: Optional[str] = None
    declaration: Optional[ImportDeclaration] = None

    @classmethod
    def not_visible(
        cls,
        declaration: Optional[ImportDeclaration] = None
    ) -> "ImportResolution":
        return cls(Visibility.NOT_VISIBLE, declaration=declaration)

    @classmethod
    def visible_as(
        cls,
        alias: str,
        declaration: ImportDeclaration
    ) -> "ImportResolution":
        return cls(Visibility.VISIBLE, alias=alias, declaration=declaration)

    @classmethod
    def dot_imported(cls, declaration: ImportDeclaration) -> "ImportResolution":
        return cls(Visibility.DOT_IMPORTED, declaration=declaration)

    @property
    def is_visible(self) -> bool:
        return self.visibility is Visibility.VISIBLE

    @property
    def is_dot_imported(self) -> bool:
        return self.visibility is Visibility.DOT_IMPORTED


def resolve_flag_import(imports: Iterable[ImportDeclaration]) -> ImportResolution:
    """import宣言からflagパッケージのローカル名を解決する。

    パスが ``flag`` に完全一致する最初のimportのみを対象とする。
    Goでは同一パスの重複importは事実上存在しないため、2件目以降は見ない。

    Args:
        imports: ファイルのimport宣言（ソース順）

    Returns:
        NOT_VISIBLE / VISIBLE(alias) / DOT_IMPORTED のいずれか
    """
    for imp in imports:
        if imp.path != FLAG_PACKAGE_PATH:
            continue

        if imp.is_dot_import:
            return ImportResolution.dot_imported(imp)

        # 副作用目的のimportには照合できる名前がない
        if imp.is_blank_import:
            return ImportResolution.not_visible(imp)

        return ImportResolution.visible_as(imp.alias or FLAG_PACKAGE_NAME, imp)

    return ImportResolution.not_visible()


class DotImportGuard:
    """flagパッケージのドットインポートを検出する。

    ドットインポートされるとflagの関数が他の識別子と区別できなくなるため、
    Problemを1件報告し、そのファイルの呼び出し解析は行わない。
    """

    def check(
        self,
        resolution: ImportResolution,
        package: str
    ) -> Optional[Problem]:
        """ドットインポートであればProblemを返す。

        Args:
            resolution: ``resolve_flag_import`` の結果
            package: パッケージのインポートパス

        Returns:
            ドットインポートの場合はProblem、それ以外はNone
        """
        if not resolution.is_dot_imported:
            return None

        return Problem(
            package=package,
            position=resolution.declaration.position,
            message=DOT_IMPORT_MESSAGE,
            check=CheckType.DOT_IMPORT,
        )
