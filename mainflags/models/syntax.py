"""Goソースの構文木モデル。

パーサーライブラリに依存しない閉じたノード階層と、
ノード種別ごとに1箇所でディスパッチするビジターを提供する。
"""

from dataclasses import dataclass, field
from typing import Iterator, List

from .position import Position


@dataclass
class Node:
    """構文木ノードの基底クラス。"""
    position: Position

    @property
    def kind(self) -> str:
        """ノード種別のタグ。"""
        return type(self).__name__

    def children(self) -> Iterator["Node"]:
        """子ノードをソース順に返す。"""
        return iter(())


@dataclass
class Identifier(Node):
    """単純な識別子（例: ``flag``）。"""
    name: str = ""


@dataclass
class Selector(Node):
    """セレクタ式 ``operand.member``。"""
    operand: Node = None
    member: str = ""

    def children(self) -> Iterator[Node]:
        yield self.operand


@dataclass
class Call(Node):
    """関数呼び出し式。"""
    function: Node = None
    arguments: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield self.function
        yield from self.arguments


@dataclass
class Composite(Node):
    """上記以外の構文（宣言、ブロック、リテラル、型など）。"""
    type_name: str = ""
    nodes: List[Node] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return self.type_name

    def children(self) -> Iterator[Node]:
        return iter(self.nodes)


class NodeVisitor:
    """構文木を深さ優先で走査するビジター。

    ``visit`` はノードのクラス名に対応する ``visit_<ClassName>`` を呼び出し、
    存在しない場合は ``generic_visit`` で子ノードを走査する。
    """

    def visit(self, node: Node) -> None:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        method(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.children():
            if child is not None:
                self.visit(child)
