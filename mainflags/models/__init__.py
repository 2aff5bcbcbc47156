"""flag使用解析のデータモデル。"""

from .position import Position
from .problem import (
    ALLOWED_FLAG_FUNCTIONS,
    FLAG_PACKAGE_NAME,
    FLAG_PACKAGE_PATH,
    CheckType,
    Problem,
)
from .package import ImportDeclaration, Package, SourceFile
from .syntax import Call, Composite, Identifier, Node, NodeVisitor, Selector

__all__ = [
    "Position",
    "ALLOWED_FLAG_FUNCTIONS",
    "FLAG_PACKAGE_NAME",
    "FLAG_PACKAGE_PATH",
    "CheckType",
    "Problem",
    "ImportDeclaration",
    "Package",
    "SourceFile",
    "Call",
    "Composite",
    "Identifier",
    "Node",
    "NodeVisitor",
    "Selector",
]
