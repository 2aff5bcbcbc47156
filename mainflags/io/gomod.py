"""go.modを解析し、パッケージのインポートパスを解決する。"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import re

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"

# module example.com/foo または module "example.com/foo"
_MODULE_RE = re.compile(r'^\s*module\s+"?([^\s"]+)"?\s*(?://.*)?$', re.MULTILINE)


@dataclass
class GoModule:
    """go.modから抽出したモジュール情報。

    Attributes:
        path: モジュールパス
        root: go.modがあるディレクトリ
    """
    path: str
    root: Path

    def import_path_for(self, directory: Path) -> str:
        """モジュール内ディレクトリのインポートパスを返す。

        Args:
            directory: パッケージのディレクトリ（モジュールルート配下）

        Returns:
            インポートパス
        """
        rel = directory.resolve().relative_to(self.root)
        if rel == Path("."):
            return self.path
        return f"{self.path}/{rel.as_posix()}"


def find_go_mod(directory: Path) -> Optional[Path]:
    """ディレクトリから親方向にgo.modを検索する。

    Args:
        directory: 検索開始ディレクトリ

    Returns:
        go.modのパス、見つからない場合はNone
    """
    current = directory.resolve()
    for candidate in [current, *current.parents]:
        go_mod = candidate / GO_MOD
        if go_mod.is_file():
            return go_mod
    return None


def read_module_path(go_mod: Path) -> Optional[str]:
    """go.modのmoduleディレクティブからモジュールパスを抽出する。

    Args:
        go_mod: go.modのパス

    Returns:
        モジュールパス、読み取れない場合はNone
    """
    try:
        content = go_mod.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.error(f"Failed to read {go_mod}: {e}")
        return None

    match = _MODULE_RE.search(content)
    if not match:
        logger.warning(f"No module directive found in {go_mod}")
        return None

    logger.debug(f"Found module path: {match.group(1)}")
    return match.group(1)


def load_module(directory: Path) -> Optional[GoModule]:
    """ディレクトリを含むGoモジュールを取得する。

    Args:
        directory: モジュール配下のディレクトリ

    Returns:
        GoModule、モジュール外の場合はNone
    """
    go_mod = find_go_mod(directory)
    if go_mod is None:
        return None

    module_path = read_module_path(go_mod)
    if module_path is None:
        return None

    return GoModule(path=module_path, root=go_mod.parent.resolve())
