"""package main以外によるGoのグローバルflagset使用を検出する静的チェック。"""

__version__ = "0.1.0"
