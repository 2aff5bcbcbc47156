"""ローダーが提供するGoパッケージ・ファイルのモデル。"""

from dataclasses import dataclass, field
from typing import List, Optional

from .position import Position
from .syntax import Node

ENTRY_POINT_PACKAGE_NAME = "main"


@dataclass(frozen=True)
class ImportDeclaration:
    """1つのimport宣言。

    Attributes:
        path: 引用符を外したインポートパス
        alias: 明示的な名前（``"."`` はドットインポート、``"_"`` はブランクインポート）
        position: import宣言の位置
    """
    path: str
    alias: Optional[str]
    position: Position

    @property
    def is_dot_import(self) -> bool:
        return self.alias == "."

    @property
    def is_blank_import(self) -> bool:
        return self.alias == "_"


@dataclass
class SourceFile:
    """パース済みのGoソースファイル。"""
    path: str
    package_name: str
    imports: List[ImportDeclaration]
    root: Node


@dataclass
class Package:
    """1つのGoパッケージ。"""
    name: str
    import_path: str
    directory: str
    files: List[SourceFile] = field(default_factory=list)

    @property
    def is_entry_point(self) -> bool:
        """実行ファイルを生成するパッケージ（package main）かどうか。"""
        return self.name == ENTRY_POINT_PACKAGE_NAME

    def __str__(self) -> str:
        return f"{self.import_path} ({len(self.files)} files)"
