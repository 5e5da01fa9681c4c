"""
Excel export of pot balances and settlement suggestions
"""
from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Balance, Pot
from computations import compute_summary, suggest_settlements

AMOUNT_FORMAT = "0.000000"
BALANCES_FILL = "2F5D50"
SETTLEMENTS_FILL = "8A5A19"
DEBT_FONT = Font(color="B00020")  # negative nets


def _style_header(ws, fill_color: str):
    """Bold white header on a solid fill with a rule underneath"""
    font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor=fill_color)
    rule = Border(bottom=Side(style="medium", color="333333"))
    for cell in ws[1]:
        cell.font = font
        cell.fill = fill
        cell.border = rule
        cell.alignment = Alignment(horizontal="left" if cell.column <= 2 else "right")
    ws.freeze_panes = "A2"


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def export_excel(pot: Pot, filepath: str) -> None:
    """
    Export a settlement report with two sheets:
    - Balances: paid, owed and net per member, debtors in red
    - Settlements: suggested transfers
    """
    wb = Workbook()
    wb.remove(wb.active)

    cur = pot.base_currency
    names = {m.id: m.name for m in pot.members}
    summary = compute_summary(pot)

    ws = wb.create_sheet("Balances")
    ws.append(["Member ID", "Name", f"Paid ({cur})", f"Share ({cur})", f"Net ({cur})"])
    _style_header(ws, BALANCES_FILL)
    for p, s in summary.items():
        ws.append([p, names.get(p, ""), s["paid"], s["owed"], s["net"]])
        row = ws.max_row
        for c in range(3, 6):
            ws.cell(row, c).number_format = AMOUNT_FORMAT
        if s["net"] < 0:
            ws.cell(row, 5).font = DEBT_FONT
    _autosize_columns(ws)

    ws = wb.create_sheet("Settlements")
    ws.append(["Payer", "Recipient", f"Amount ({cur})"])
    _style_header(ws, SETTLEMENTS_FILL)
    balances = [Balance(member_id=p, net=s["net"]) for p, s in summary.items()]
    for t in suggest_settlements(balances):
        ws.append([t.from_member, t.to_member, t.amount])
        ws.cell(ws.max_row, 3).number_format = AMOUNT_FORMAT
    _autosize_columns(ws)

    wb.save(filepath)
