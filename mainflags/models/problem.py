"""フラグ使用規約違反（Problem）のモデル。"""

from dataclasses import dataclass, field
from enum import Enum

from .position import Position


# グローバルflagsetに対して呼び出してよい読み取り専用の関数
ALLOWED_FLAG_FUNCTIONS = frozenset({
    "Arg",
    "Args",
    "NArg",
    "NArgs",
    "Parse",
    "Parsed",
    "PrintDefaults",
    "Set",
    "UnquoteUsage",
    "Visit",
    "VisitAll",
    "Lookup",
    "NewFlagSet",
})

FLAG_PACKAGE_PATH = "flag"
FLAG_PACKAGE_NAME = "flag"

DOT_IMPORT_MESSAGE = "package flag should not be dot-imported"
GLOBAL_FLAGSET_MESSAGE = "{alias}.{member} should not be used on the global flagset"


class CheckType(Enum):
    """Problemを生成したチェックの種類。"""
    DOT_IMPORT = "dot-import"
    GLOBAL_FLAGSET = "global-flagset"


@dataclass(frozen=True)
class Problem:
    """リンターが検出した1件の問題。

    Attributes:
        package: パッケージのインポートパス
        position: 問題の位置
        message: 出力するメッセージ
        check: 問題を生成したチェック（出力行には含めない）
    """
    package: str
    position: Position
    message: str
    check: CheckType = field(default=CheckType.GLOBAL_FLAGSET, compare=False)

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"
