"""
신고서 엑셀 내보내기 (openpyxl)

소득세 / 부가세를 시트별로 나눠 저장합니다.
"""
from io import BytesIO

import openpyxl
from openpyxl.styles import Font


INCOME_TAX_HEADERS = [
    'Tax year', 'Status', 'Employment income', 'Business income', 'Entity distributions',
    'Aggregate presumed income', 'Initial tax', 'MTC applied', 'Tax liability',
    'Penalties', 'Interest', 'Total due', 'Submitted at',
]

VAT_HEADERS = [
    'Tax year', 'Quarter', 'Status', 'Total retail sales', 'Value added', 'Initial VAT',
    'MTC applied', 'VAT liability', 'Penalties', 'Interest', 'Total due', 'Submitted at',
]


def _submitted_at(tax_return):
    return tax_return.submitted_at.strftime('%Y-%m-%d %H:%M') if tax_return.submitted_at else ''


def _append_header(ws, headers):
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)


def export_returns_to_excel(income_returns, vat_returns):
    """
    신고서 목록을 엑셀로 내보내기

    금액은 Decimal을 float으로 변환 (엑셀 호환)

    Returns:
        BytesIO (처음 위치로 되감김)
    """
    wb = openpyxl.Workbook()

    ws = wb.active
    ws.title = 'Income tax'
    _append_header(ws, INCOME_TAX_HEADERS)
    for tax_return in income_returns:
        ws.append([
            tax_return.tax_year,
            tax_return.get_status_display(),
            float(tax_return.employment_income),
            float(tax_return.business_income),
            float(tax_return.entity_distributions),
            float(tax_return.aggregate_presumed_income),
            float(tax_return.initial_tax),
            float(tax_return.applied_credit),
            float(tax_return.tax_liability),
            float(tax_return.penalties),
            float(tax_return.interest),
            float(tax_return.total_due),
            _submitted_at(tax_return),
        ])

    ws = wb.create_sheet('VAT')
    _append_header(ws, VAT_HEADERS)
    for vat_return in vat_returns:
        ws.append([
            vat_return.tax_year,
            vat_return.quarter,
            vat_return.get_status_display(),
            float(vat_return.total_retail_sales),
            float(vat_return.value_added),
            float(vat_return.initial_vat),
            float(vat_return.applied_credit),
            float(vat_return.vat_liability),
            float(vat_return.penalties),
            float(vat_return.interest),
            float(vat_return.total_due),
            _submitted_at(vat_return),
        ])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
