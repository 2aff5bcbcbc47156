"""tree-sitterを使用したGoソースコード解析のラッパー。"""

from typing import List, Optional
from pathlib import Path
import logging

import tree_sitter_go
from tree_sitter import Language, Parser

from ..models.package import ImportDeclaration, SourceFile
from ..models.position import Position
from ..models.syntax import Call, Composite, Identifier, Node, Selector

logger = logging.getLogger(__name__)


class GoParseError(Exception):
    """Goソースのパース時のエラー。"""
    pass


class GoParser:
    """tree-sitter-goでGoソースをパースし、構文木モデルに変換する。

    tree-sitterの具象構文木から、解析に必要なパッケージ名・import宣言・
    式の木を取り出す。変換後の木はtree-sitterに依存しない。
    """

    def __init__(self):
        """Goパーサーを初期化する。"""
        self.language = Language(tree_sitter_go.language())
        self._parser = Parser(self.language)
        logger.debug("tree-sitter Go parser initialized")

    def parse_file(self, file_path: str) -> SourceFile:
        """Goソースファイルをパースする。

        Args:
            file_path: ソースファイルのパス

        Returns:
            SourceFile

        Raises:
            GoParseError: 読み込みまたはパースに失敗した場合
        """
        try:
            source = Path(file_path).read_bytes()
        except OSError as e:
            raise GoParseError(f"Failed to read {file_path}: {e}")

        return self.parse_bytes(source, file_path)

    def parse_string(self, source_code: str, filename: str = "temp.go") -> SourceFile:
        """文字列からGoソースコードをパースする。

        Args:
            source_code: Goソースコード
            filename: ソースの仮想ファイル名

        Returns:
            SourceFile
        """
        return self.parse_bytes(source_code.encode("utf-8"), filename)

    def parse_bytes(self, source: bytes, filename: str) -> SourceFile:
        """バイト列のGoソースをパースする。

        Args:
            source: UTF-8のGoソース
            filename: 位置情報に使用するファイル名

        Returns:
            SourceFile

        Raises:
            GoParseError: 不正なUTF-8または構文エラーがある場合
        """
        self._check_encoding(source, filename)

        tree = self._parser.parse(source)
        root = tree.root_node

        if root.has_error:
            error_node = self._find_error(root)
            where = self._position(error_node or root, filename)
            raise GoParseError(f"{where}: syntax error")

        package_name = self._package_name(root)
        if package_name is None:
            raise GoParseError(f"{filename}: missing package clause")

        return SourceFile(
            path=filename,
            package_name=package_name,
            imports=self._imports(root, filename),
            root=self._convert(root, filename),
        )

    @staticmethod
    def _check_encoding(source: bytes, filename: str) -> None:
        """ソースが正しいUTF-8であることを確認する。"""
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as e:
            line = source.count(b"\n", 0, e.start) + 1
            column = e.start - (source.rfind(b"\n", 0, e.start) + 1) + 1
            where = Position(filename=filename, line=line, column=column)
            raise GoParseError(f"{where}: illegal UTF-8 encoding") from e

    def _find_error(self, node):
        """最初のERRORまたはMISSINGノードを探す。"""
        if node.type == "ERROR" or node.is_missing:
            return node

        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._find_error(child)
                if found is not None:
                    return found

        return None

    def _package_name(self, root) -> Optional[str]:
        for child in root.named_children:
            if child.type != "package_clause":
                continue
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return self._text(ident)
        return None

    def _imports(self, root, filename: str) -> List[ImportDeclaration]:
        """ファイル内の全import宣言をソース順に取り出す。"""
        imports: List[ImportDeclaration] = []

        for decl in root.named_children:
            if decl.type != "import_declaration":
                continue
            for spec in self._import_specs(decl):
                name_node = spec.child_by_field_name("name")
                path_node = spec.child_by_field_name("path")
                if path_node is None:
                    continue

                imports.append(ImportDeclaration(
                    path=self._unquote(self._text(path_node)),
                    alias=self._text(name_node) if name_node is not None else None,
                    position=self._position(spec, filename),
                ))

        return imports

    def _import_specs(self, decl) -> List:
        specs = []
        for child in decl.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(
                    c for c in child.named_children if c.type == "import_spec"
                )
        return specs

    def _convert(self, node, filename: str) -> Node:
        """tree-sitterノードを構文木モデルに変換する。

        Args:
            node: tree-sitterのノード
            filename: ファイル名

        Returns:
            変換後のノード
        """
        position = self._position(node, filename)

        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            return Call(
                position=position,
                function=self._convert(function, filename),
                arguments=[
                    self._convert(arg, filename)
                    for arg in (arguments.named_children if arguments else [])
                ],
            )

        if node.type == "selector_expression":
            operand = node.child_by_field_name("operand")
            member = node.child_by_field_name("field")
            return Selector(
                position=position,
                operand=self._convert(operand, filename),
                member=self._text(member),
            )

        if node.type == "identifier":
            return Identifier(position=position, name=self._text(node))

        return Composite(
            position=position,
            type_name=node.type,
            nodes=[self._convert(child, filename) for child in node.named_children],
        )

    @staticmethod
    def _position(node, filename: str) -> Position:
        # tree-sitterの行・列は0始まり、列はバイト単位
        row, column = node.start_point[0], node.start_point[1]
        return Position(filename=filename, line=row + 1, column=column + 1)

    @staticmethod
    def _text(node) -> str:
        return node.text.decode("utf-8")

    @staticmethod
    def _unquote(literal: str) -> str:
        """インポートパスのリテラルから引用符を外す。"""
        if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
            return literal[1:-1]
        return literal
