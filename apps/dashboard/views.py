"""
대시보드

Dashboard 앱은 자체 모델을 가지지 않습니다.
신고서 모델(IncomeTaxReturn, VatReturn)의 데이터를 모아 보여줍니다.

- 신고 카드: 소득세 마감일 / 현재 분기 부가세 마감일
- 내 신고서 목록 (연도 최신순, 부가세는 분기 역순)
"""
import logging

from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.utils import timezone

from apps.tax.models import IncomeTaxReturn, VatReturn
from apps.tax.utils import (
    current_tax_year,
    get_quarter,
    get_quarter_dates,
    income_tax_due_date,
    vat_due_date,
)

logger = logging.getLogger(__name__)


def _filing_cards(user, today):
    """신고 안내 카드 정보"""
    tax_year = current_tax_year(today)
    quarter = get_quarter(today)
    period_start, period_end = get_quarter_dates(today.year, quarter)

    income_filed = IncomeTaxReturn.objects.for_user(user).filter(tax_year=tax_year).first()
    vat_filed = VatReturn.objects.for_user(user).filter(tax_year=today.year, quarter=quarter).first()

    return [
        {
            'return_type': 'income',
            'title': 'Individual income tax (Form 1)',
            'period': f'Tax year {tax_year}',
            'due_date': income_tax_due_date(tax_year),
            'existing': income_filed,
            'create_url': 'tax:income_tax_create',
        },
        {
            'return_type': 'vat',
            'title': 'Retail VAT (Form 3)',
            'period': f'{today.year} Q{quarter} ({period_start:%b %d} - {period_end:%b %d})',
            'due_date': vat_due_date(today.year, quarter),
            'existing': vat_filed,
            'create_url': 'tax:vat_create',
        },
    ]


def get_user_returns(user):
    """
    사용자 신고서 통합 목록

    정렬: 연도 최신순 → 같은 연도 내 부가세는 분기 역순 → 소득세는 분기 뒤
    """
    returns = list(IncomeTaxReturn.objects.for_user(user)) + list(VatReturn.objects.for_user(user))
    return sorted(
        returns,
        key=lambda r: (r.tax_year, getattr(r, 'quarter', 0)),
        reverse=True,
    )


@login_required
def index(request):
    user = request.user
    today = timezone.localdate()

    returns = get_user_returns(user)
    drafts = [r for r in returns if r.is_editable]

    context = {
        'filing_cards': _filing_cards(user, today),
        'returns': returns,
        'draft_count': len(drafts),
        'submitted_count': len(returns) - len(drafts),
        'today': today,
    }
    return render(request, 'dashboard/index.html', context)
