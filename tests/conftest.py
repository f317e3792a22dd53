"""
Shared fixtures: synthetic statement workbooks.
"""
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest
from openpyxl import Workbook


@pytest.fixture
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing an .xlsx file.

    Call with a mapping of sheet name -> rows, plus optional merged
    ranges per sheet, e.g. merges={"Sheet1": ["A1:F1"]}, and number
    formats per cell, e.g. formats={"Sheet1": {"AL27": "0%"}}.
    """
    counter = [0]

    def _make(
        sheets: Dict[str, List[List]],
        merges: Optional[Dict[str, List[str]]] = None,
        formats: Optional[Dict[str, Dict[str, str]]] = None
    ) -> Path:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for name, rows in sheets.items():
            worksheet = workbook.create_sheet(title=name)
            for row in rows:
                worksheet.append(row)
            for cell_range in (merges or {}).get(name, []):
                worksheet.merge_cells(cell_range)
            for coordinate, number_format in (formats or {}).get(name, {}).items():
                worksheet[coordinate].number_format = number_format

        counter[0] += 1
        path = tmp_path / f"statement_{counter[0]}.xlsx"
        workbook.save(path)
        return path

    return _make
