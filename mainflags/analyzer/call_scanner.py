"""1ファイル内のグローバルflagsetへの呼び出しを検出する。"""

from typing import FrozenSet, List, Optional

from ..models.package import SourceFile
from ..models.problem import (
    ALLOWED_FLAG_FUNCTIONS,
    CheckType,
    GLOBAL_FLAGSET_MESSAGE,
    Problem,
)
from ..models.syntax import Call, Identifier, NodeVisitor, Selector


def is_qualified_call(call: Call, alias: str) -> bool:
    """呼び出しが ``<alias>.<Member>(...)`` の形かを判定する。"""
    selector = call.function
    if not isinstance(selector, Selector):
        return False

    operand = selector.operand
    if not isinstance(operand, Identifier):
        return False

    return operand.name == alias


def check_call(
    call: Call,
    alias: str,
    allowed: FrozenSet[str] = ALLOWED_FLAG_FUNCTIONS
) -> Optional[str]:
    """1つの呼び出し式を許可リストと照合する。

    Args:
        call: 検査する呼び出し式
        alias: ファイル内でのflagパッケージのローカル名
        allowed: グローバルflagsetに対して許可されたメンバー名

    Returns:
        許可されていない呼び出しならメッセージ、それ以外はNone
    """
    if not is_qualified_call(call, alias):
        return None

    member = call.function.member
    if member in allowed:
        return None

    return GLOBAL_FLAGSET_MESSAGE.format(alias=alias, member=member)


class CallSiteScanner(NodeVisitor):
    """ファイルを1回走査し、許可されていない ``<alias>.<Member>`` 呼び出しを報告する。"""

    def __init__(
        self,
        source_file: SourceFile,
        alias: str,
        package: str,
        allowed: FrozenSet[str] = ALLOWED_FLAG_FUNCTIONS
    ):
        """スキャナーを初期化する。

        Args:
            source_file: 走査するパース済みファイル
            alias: flagパッケージが見えているローカル名
            package: 所属パッケージのインポートパス
            allowed: 許可リストのメンバー名
        """
        self.source_file = source_file
        self.alias = alias
        self.package = package
        self.allowed = allowed
        self._problems: List[Problem] = []

    def scan(self) -> List[Problem]:
        """ファイルを走査し、Problemをソース順に返す。"""
        self._problems = []
        self.visit(self.source_file.root)
        return list(self._problems)

    def visit_Call(self, node: Call) -> None:
        """flag呼び出しを検査し、それ以外の呼び出しは子を走査する。"""
        if not is_qualified_call(node, self.alias):
            self.generic_visit(node)
            return

        message = check_call(node, self.alias, self.allowed)
        if message is not None:
            self._problems.append(Problem(
                package=self.package,
                position=node.position,
                message=message,
                check=CheckType.GLOBAL_FLAGSET,
            ))

        # flag呼び出しの引数は走査しない。flag.Var(flag.String(...))は外側のみ報告
