"""解析結果のExcel出力モジュール。"""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional
from pathlib import Path
import logging

from openpyxl import Workbook, load_workbook
from openpyxl.styles import PatternFill, Font, Alignment, Border, Side

from ..models.problem import CheckType, Problem
from .reporter import relative_filename

logger = logging.getLogger(__name__)


class ExcelWriter:
    """ProblemをExcelファイルに書き込む。"""

    # 各チェック種別の色（RGB hex、#なし）
    CHECK_COLORS: Dict[CheckType, str] = {
        CheckType.DOT_IMPORT: "FFEB9C",      # 黄
        CheckType.GLOBAL_FLAGSET: "FFC7CE",  # 赤
    }

    PROBLEM_HEADERS = ["File", "Line", "Column", "Package", "Check", "Message"]
    PROBLEM_WIDTHS = [40, 8, 8, 40, 16, 60]

    def __init__(self, output_file: str):
        """Excelライターを初期化する。

        Args:
            output_file: 出力Excelファイルのパス
        """
        self.output_file = Path(output_file)

    def write_problems(
        self,
        problems: List[Problem],
        cwd: Optional[str] = None
    ) -> None:
        """Problemsシートを持つワークブックを作成する。

        Args:
            problems: 出力するProblem（出力順）
            cwd: ファイルパスを相対化する基準ディレクトリ
        """
        self.output_file.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        ws = wb.active
        ws.title = "Problems"

        self._add_headers(ws)

        for row_num, problem in enumerate(problems, 2):
            self._write_problem_row(ws, row_num, problem, cwd)

        self._adjust_column_widths(ws)
        ws.freeze_panes = "A2"

        wb.save(self.output_file)
        logger.info(f"{len(problems)} problems written to {self.output_file}")

    def _add_headers(self, ws) -> None:
        """ヘッダー行を追加する。"""
        header_alignment = Alignment(horizontal="center", vertical="center")
        header_fill = PatternFill(
            start_color="4472C4",
            end_color="4472C4",
            fill_type="solid"
        )
        white_font = Font(bold=True, color="FFFFFF")

        for i, header in enumerate(self.PROBLEM_HEADERS, 1):
            cell = ws.cell(row=1, column=i)
            cell.value = header
            cell.font = white_font
            cell.alignment = header_alignment
            cell.fill = header_fill
            cell.border = self._thin_border()

    def _write_problem_row(
        self,
        ws,
        row_num: int,
        problem: Problem,
        cwd: Optional[str]
    ) -> None:
        """1行分のProblemを書き込む。

        Args:
            ws: ワークシートオブジェクト
            row_num: 書き込む行番号
            problem: 書き込むProblem
            cwd: 相対パスの基準ディレクトリ
        """
        values = [
            relative_filename(problem.position.filename, cwd),
            problem.position.line,
            problem.position.column,
            problem.package,
            problem.check.value,
            problem.message,
        ]

        border = self._thin_border()
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_num, column=col, value=value)
            cell.border = border

        check_cell = ws.cell(row=row_num, column=5)
        check_cell.fill = PatternFill(
            start_color=self.CHECK_COLORS[problem.check],
            end_color=self.CHECK_COLORS[problem.check],
            fill_type="solid"
        )
        check_cell.alignment = Alignment(horizontal="center")

        ws.cell(row=row_num, column=6).alignment = Alignment(
            wrap_text=True, vertical="top"
        )

    def _adjust_column_widths(self, ws) -> None:
        for i, width in enumerate(self.PROBLEM_WIDTHS, 1):
            col_letter = ws.cell(row=1, column=i).column_letter
            ws.column_dimensions[col_letter].width = width

    def write_summary(self, problems: List[Problem]) -> None:
        """統計情報を含むサマリーシートを追加する。

        Args:
            problems: 全Problemのリスト
        """
        wb = load_workbook(self.output_file)

        # 既存のSummaryシートがあれば削除
        if "Summary" in wb.sheetnames:
            del wb["Summary"]

        ws = wb.create_sheet("Summary")

        total = len(problems)
        by_check = Counter(problem.check for problem in problems)
        by_package = Counter(problem.package for problem in problems)

        # タイトルとタイムスタンプ
        ws["A1"] = "mainflags summary"
        ws["A1"].font = Font(bold=True, size=14)
        ws.merge_cells("A1:C1")
        ws["A2"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        ws.merge_cells("A2:C2")

        header_font = Font(bold=True)
        border = self._thin_border()

        for i, header in enumerate(["Check", "Count", "Ratio"], 1):
            cell = ws.cell(row=4, column=i, value=header)
            cell.font = header_font
            cell.border = border
            cell.alignment = Alignment(horizontal="center")

        row = 5
        for check_type in CheckType:
            count = by_check.get(check_type, 0)

            cell_type = ws.cell(row=row, column=1, value=check_type.value)
            cell_type.fill = PatternFill(
                start_color=self.CHECK_COLORS[check_type],
                end_color=self.CHECK_COLORS[check_type],
                fill_type="solid"
            )
            cell_type.border = border

            cell_count = ws.cell(row=row, column=2, value=count)
            cell_count.alignment = Alignment(horizontal="right")
            cell_count.border = border

            cell_pct = ws.cell(
                row=row,
                column=3,
                value=f"{count / total * 100:.1f}%" if total > 0 else "0%"
            )
            cell_pct.alignment = Alignment(horizontal="right")
            cell_pct.border = border

            row += 1

        # 合計行
        for col, value in enumerate(["Total", total, "100%"], 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.font = Font(bold=True)
            cell.border = border

        # パッケージ別件数
        row += 2
        for i, header in enumerate(["Package", "Count"], 1):
            cell = ws.cell(row=row, column=i, value=header)
            cell.font = header_font
            cell.border = border

        for package, count in sorted(by_package.items()):
            row += 1
            ws.cell(row=row, column=1, value=package).border = border
            ws.cell(row=row, column=2, value=count).border = border

        ws.column_dimensions["A"].width = 40
        ws.column_dimensions["B"].width = 10
        ws.column_dimensions["C"].width = 10

        wb.save(self.output_file)
        logger.info(f"Summary sheet added to {self.output_file}")

    @staticmethod
    def _thin_border() -> Border:
        return Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin")
        )
