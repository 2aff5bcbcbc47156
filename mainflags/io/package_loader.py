"""Goパッケージのローダー。

パッケージパターンをディレクトリに解決し、各ディレクトリのGoファイルを
パースしてPackageを生成する。読み込みは全件成功か全件失敗のいずれか。
"""

from typing import Dict, List, Optional
from pathlib import Path
import logging
import os
import re

from ..models.package import Package, SourceFile
from .go_parser import GoParseError, GoParser
from .gomod import GO_MOD, GoModule, load_module

logger = logging.getLogger(__name__)

RECURSIVE_SUFFIX = "..."

# 再帰パターンで走査しないディレクトリ
SKIPPED_DIRECTORIES = {"testdata", "vendor"}

_IGNORE_CONSTRAINT_RE = re.compile(r"^//go:build\s+ignore\s*$")


class LoadError(Exception):
    """パッケージの読み込みに失敗した場合のエラー。"""
    pass


class PackageLoader:
    """パッケージパターンからPackageを読み込む。"""

    def __init__(
        self,
        parser: Optional[GoParser] = None,
        cwd: Optional[str] = None
    ):
        """ローダーを初期化する。

        Args:
            parser: 使用するGoParser（省略時は新規作成）
            cwd: パターン解決の基準ディレクトリ（省略時はカレント）
        """
        self.parser = parser or GoParser()
        self.cwd = Path(cwd or os.getcwd()).resolve()
        self._modules: Dict[Path, Optional[GoModule]] = {}

    def load(self, patterns: List[str]) -> List[Package]:
        """パターンに一致する全パッケージを読み込む。

        Args:
            patterns: パッケージパターン（空の場合は ``.``）

        Returns:
            Packageのリスト（パターン順、重複なし）

        Raises:
            LoadError: いずれかのパッケージを読み込めない場合
        """
        directories: List[Path] = []
        seen = set()

        for pattern in patterns or ["."]:
            for directory in self._resolve_pattern(pattern):
                if directory in seen:
                    continue
                seen.add(directory)
                directories.append(directory)

        logger.debug(f"Loading {len(directories)} packages")
        return [self.load_directory(directory) for directory in directories]

    def load_directory(self, directory: Path) -> Package:
        """1つのディレクトリをパッケージとして読み込む。

        Args:
            directory: パッケージのディレクトリ

        Returns:
            Package

        Raises:
            LoadError: Goファイルがない、パースに失敗した、
                または複数のパッケージ名が混在する場合
        """
        directory = directory.resolve()
        files = self._go_files(directory)
        if not files:
            raise LoadError(f"no Go files in {directory}")

        source_files: List[SourceFile] = []
        for path in files:
            try:
                source_files.append(self.parser.parse_file(str(path)))
            except GoParseError as e:
                raise LoadError(str(e)) from e

        names = {}
        for source_file in source_files:
            names.setdefault(source_file.package_name, Path(source_file.path).name)
        if len(names) > 1:
            found = " and ".join(f"{name} ({fname})" for name, fname in names.items())
            raise LoadError(f"found packages {found} in {directory}")

        package = Package(
            name=source_files[0].package_name,
            import_path=self._import_path(directory),
            directory=str(directory),
            files=source_files,
        )
        logger.debug(f"Loaded package {package}")
        return package

    def _resolve_pattern(self, pattern: str) -> List[Path]:
        """パターンをパッケージディレクトリのリストに解決する。"""
        recursive = pattern == RECURSIVE_SUFFIX or pattern.endswith("/" + RECURSIVE_SUFFIX)
        base = pattern[:-len(RECURSIVE_SUFFIX)].rstrip("/") if recursive else pattern

        directory = self._resolve_directory(base or ".", pattern)
        if not recursive:
            return [directory]

        directories = self._walk(directory)
        if not directories:
            logger.warning(f"pattern {pattern}: matched no packages")
        return directories

    def _resolve_directory(self, base: str, pattern: str) -> Path:
        candidate = Path(base)
        if not candidate.is_absolute():
            candidate = self.cwd / candidate
        if candidate.is_dir():
            return candidate.resolve()

        # モジュール内のインポートパスとして解決
        module = self._module_for(self.cwd)
        if module is not None:
            if base == module.path:
                return module.root
            prefix = module.path + "/"
            if base.startswith(prefix):
                candidate = module.root / base[len(prefix):]
                if candidate.is_dir():
                    return candidate.resolve()

        raise LoadError(f"cannot find package {pattern!r}")

    def _walk(self, root: Path) -> List[Path]:
        directories: List[Path] = []
        for current, dirnames, _ in os.walk(root):
            path = Path(current)
            # go.modを持つサブディレクトリは別モジュールなので対象外
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in SKIPPED_DIRECTORIES
                and not d.startswith((".", "_"))
                and not (path / d / GO_MOD).is_file()
            )
            if self._go_files(path):
                directories.append(path.resolve())
        return directories

    def _go_files(self, directory: Path) -> List[Path]:
        """ディレクトリ内の解析対象Goファイルをファイル名順に返す。"""
        files = []
        for path in sorted(directory.iterdir()):
            name = path.name
            if not path.is_file() or path.suffix != ".go":
                continue
            if name.endswith("_test.go") or name.startswith((".", "_")):
                continue
            if self._is_ignored(path):
                logger.debug(f"{path} has build constraint ignore, skipping")
                continue
            files.append(path)
        return files

    def _is_ignored(self, path: Path) -> bool:
        """``//go:build ignore`` 制約を持つファイルかを判定する。"""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    stripped = line.strip()
                    if _IGNORE_CONSTRAINT_RE.match(stripped):
                        return True
                    if stripped.startswith("package "):
                        return False
        except OSError as e:
            raise LoadError(f"Failed to read {path}: {e}") from e
        return False

    def _module_for(self, directory: Path) -> Optional[GoModule]:
        if directory not in self._modules:
            self._modules[directory] = load_module(directory)
        return self._modules[directory]

    def _import_path(self, directory: Path) -> str:
        module = self._module_for(directory)
        if module is not None:
            return module.import_path_for(directory)

        try:
            rel = directory.relative_to(self.cwd)
        except ValueError:
            return directory.as_posix()
        return rel.as_posix()
