from openpyxl import load_workbook

from config import dict_to_pot
from excel_export import export_excel


def test_export_excel_sheets(tmp_path, pot_snapshot):
    path = tmp_path / "report.xlsx"
    export_excel(dict_to_pot(pot_snapshot), str(path))

    wb = load_workbook(path)
    assert wb.sheetnames == ["Balances", "Settlements"]

    rows = list(wb["Balances"].iter_rows(values_only=True))
    assert rows[0] == ("Member ID", "Name", "Paid (DOT)", "Share (DOT)", "Net (DOT)")
    assert rows[1:] == [
        ("alice", "Alice", 30, 10, 20),
        ("bob", "Bob", 12.5, 16.25, -3.75),
        ("carol", "Carol", 0, 16.25, -16.25),
    ]

    rows = list(wb["Settlements"].iter_rows(values_only=True))
    assert rows == [
        ("Payer", "Recipient", "Amount (DOT)"),
        ("bob", "alice", 3.75),
        ("carol", "alice", 16.25),
    ]


def test_export_excel_formatting(tmp_path, pot_snapshot):
    path = tmp_path / "report.xlsx"
    export_excel(dict_to_pot(pot_snapshot), str(path))

    wb = load_workbook(path)
    ws = wb["Balances"]
    assert ws.freeze_panes == "A2"
    assert ws["A1"].font.bold
    assert ws["A1"].fill.fgColor.rgb == "002F5D50"
    assert wb["Settlements"]["A1"].fill.fgColor.rgb == "008A5A19"
    assert ws["E2"].number_format == "0.000000"

    # creditor alice in default colour, debtor bob in red
    assert ws["E2"].font.color is None or ws["E2"].font.color.rgb != "00B00020"
    assert ws["E3"].font.color.rgb == "00B00020"


def test_export_excel_settled_pot(tmp_path, make_pot):
    path = tmp_path / "empty.xlsx"
    export_excel(make_pot(["A", "B"]), str(path))

    ws = load_workbook(path)["Settlements"]
    assert ws.max_row == 1
