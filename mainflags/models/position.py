"""ソースコードの位置情報モデル。"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """ソースコード上の位置。

    行・列はいずれも1始まり。列はGoの ``token.Position`` と同じくバイト単位。
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        if self.column:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"
