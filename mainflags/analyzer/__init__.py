"""グローバルflagset使用の静的解析モジュール。"""

from .call_scanner import CallSiteScanner, check_call, is_qualified_call
from .import_resolver import (
    DotImportGuard,
    ImportResolution,
    Visibility,
    resolve_flag_import,
)
from .package_analyzer import PackageAnalyzer, PackageGate

__all__ = [
    "CallSiteScanner",
    "check_call",
    "is_qualified_call",
    "DotImportGuard",
    "ImportResolution",
    "Visibility",
    "resolve_flag_import",
    "PackageAnalyzer",
    "PackageGate",
]
