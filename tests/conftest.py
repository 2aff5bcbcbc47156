"""テスト共通のフィクスチャ。"""

import pytest

from mainflags.io.go_parser import GoParser
from mainflags.models.package import Package


@pytest.fixture(scope="session")
def go_parser():
    """セッション共通のGoParser。"""
    return GoParser()


@pytest.fixture
def make_package(go_parser):
    """Goソース文字列から1ファイルのパッケージを作成する。"""
    def _make(source: str, import_path: str = "example.com/lib", filename: str = "a.go"):
        source_file = go_parser.parse_string(source, filename)
        return Package(
            name=source_file.package_name,
            import_path=import_path,
            directory=".",
            files=[source_file],
        )
    return _make
