"""
세금 계산 유틸리티 (Próspera ZEDE Tax Statute 2019)

- Form 1: 개인 소득세 (연간)
- Form 3: 소매 부가세 (분기)

계산기는 순수 함수입니다. DB, 요청, 시간에 의존하지 않으며
같은 입력이면 항상 같은 결과를 반환합니다.
모든 금액은 Decimal로 계산하고 각 라인마다 소수점 2자리로 맞춥니다.
"""
from dataclasses import dataclass, fields
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Dict, List, Optional, Tuple

from django.conf import settings


CENT = Decimal('0.01')
ZERO = Decimal('0.00')


class TaxInputError(ValueError):
    """계산기 입력값 오류 (음수, 숫자가 아닌 값 등)"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


# =============================================================================
# 세율표
# =============================================================================

@dataclass(frozen=True)
class IncomeTaxRates:
    """소득세 세율표 (Form 1)"""
    employment_deduction: Decimal = Decimal('8000')
    presumed_income_percentage: Decimal = Decimal('0.5')
    tax_rate: Decimal = Decimal('0.1')
    entity_distribution_deduction_rate: Decimal = Decimal('0.1')


@dataclass(frozen=True)
class VatRates:
    """부가세 세율표 (Form 3)"""
    value_added_percentage: Decimal = Decimal('0.5')
    tax_rate: Decimal = Decimal('0.05')


# 2019 Tax Statute 기준
INCOME_TAX_RATES_2019 = IncomeTaxRates()
VAT_RATES_2019 = VatRates()

INCOME_TAX_RATES = INCOME_TAX_RATES_2019
VAT_RATES = VAT_RATES_2019


def get_income_tax_rates(year: int) -> IncomeTaxRates:
    """연도별 소득세 세율표 반환"""
    # 현재 지원하는 모든 연도는 2019 법령을 따름
    return INCOME_TAX_RATES_2019


def get_vat_rates(year: int) -> VatRates:
    """연도별 부가세 세율표 반환"""
    return VAT_RATES_2019


# =============================================================================
# 금액 변환
# =============================================================================

def to_decimal(value, field: str = 'amount') -> Decimal:
    """
    값을 Decimal로 변환하고 소수점 2자리로 통일

    None, 빈 문자열은 0으로 처리합니다.
    음수, NaN, Infinity, 숫자가 아닌 값은 TaxInputError를 발생시킵니다.
    """
    if value is None or str(value).strip() == '':
        return ZERO

    try:
        # float는 문자열을 거쳐야 이진 오차가 들어오지 않음
        decimal_value = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        raise TaxInputError(field, '숫자가 아닙니다')

    if not decimal_value.is_finite():
        raise TaxInputError(field, '유한한 금액이어야 합니다')
    if decimal_value < 0:
        raise TaxInputError(field, '0 이상이어야 합니다')

    # 기본 정밀도(28자리)를 넘는 금액도 센트 단위까지 담도록
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, decimal_value.adjusted() + 3)
        try:
            return decimal_value.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise TaxInputError(field, '처리할 수 없는 금액입니다')


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _working_precision(record) -> int:
    """가장 큰 입력 금액의 라인 계산이 반올림 없이 끝나는 자릿수"""
    largest = max(getattr(record, f.name).adjusted() for f in fields(record))
    return max(28, largest + 10)


class _AmountRecord:
    """모든 Decimal 필드를 검증/정규화하는 dataclass 믹스인"""

    def __post_init__(self):
        for f in fields(self):
            # frozen dataclass라 object.__setattr__ 사용
            object.__setattr__(self, f.name, to_decimal(getattr(self, f.name), f.name))


# =============================================================================
# 입력 / 결과 구조체
# =============================================================================

@dataclass(frozen=True)
class IncomeTaxInput(_AmountRecord):
    """Form 1 입력값 (Line 1, 3, 5, 8 + 가산세/이자)"""
    employment_income: Decimal
    business_income: Decimal
    entity_distributions: Decimal
    mtc_credit: Decimal
    penalties: Decimal = ZERO
    interest: Decimal = ZERO


@dataclass(frozen=True)
class VatInput(_AmountRecord):
    """Form 3 입력값 (Line 1, 4 + 가산세/이자)"""
    total_retail_sales: Decimal
    mtc_credit: Decimal
    penalties: Decimal = ZERO
    interest: Decimal = ZERO


@dataclass(frozen=True)
class IncomeTaxResult:
    """
    Form 1 계산 결과

    중간 라인은 화면 표시용이고 최종 금액은 total_due 입니다.
    """
    employment_income: Decimal
    presumed_employment_income: Decimal
    business_income: Decimal
    presumed_business_income: Decimal
    entity_distribution_deduction: Decimal
    aggregate_presumed_income: Decimal
    initial_tax: Decimal
    requested_credit: Decimal
    applied_credit: Decimal
    tax_liability: Decimal
    penalties: Decimal
    interest: Decimal
    total_due: Decimal

    @property
    def credit_capped(self) -> bool:
        """요청한 MTC가 Line 7을 넘어 잘렸는지 여부"""
        return self.requested_credit > self.applied_credit

    def as_dict(self) -> Dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def lines(self) -> List[Dict]:
        """서식 라인 번호 순서의 표시용 목록"""
        return [
            {'number': 1, 'label': 'Revenue from employment', 'amount': self.employment_income},
            {'number': 2, 'label': 'Presumed income from employment', 'amount': self.presumed_employment_income},
            {'number': 3, 'label': 'Revenue from business', 'amount': self.business_income},
            {'number': 4, 'label': 'Presumed income from business', 'amount': self.presumed_business_income},
            {'number': 5, 'label': 'Deduction for distributions from owned entities', 'amount': self.entity_distribution_deduction},
            {'number': 6, 'label': 'Aggregate presumed income', 'amount': self.aggregate_presumed_income},
            {'number': 7, 'label': 'Initial income tax', 'amount': self.initial_tax},
            {'number': 8, 'label': 'Marketable Tax Credit applied', 'amount': self.applied_credit},
            {'number': 9, 'label': 'Income tax liability', 'amount': self.tax_liability},
        ]


@dataclass(frozen=True)
class VatResult:
    """Form 3 계산 결과"""
    total_retail_sales: Decimal
    value_added: Decimal
    initial_vat: Decimal
    requested_credit: Decimal
    applied_credit: Decimal
    vat_liability: Decimal
    penalties: Decimal
    interest: Decimal
    total_due: Decimal

    @property
    def credit_capped(self) -> bool:
        return self.requested_credit > self.applied_credit

    def as_dict(self) -> Dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def lines(self) -> List[Dict]:
        return [
            {'number': 1, 'label': 'Value received for sale of goods and services', 'amount': self.total_retail_sales},
            {'number': 2, 'label': 'Presumed value added by retail activity', 'amount': self.value_added},
            {'number': 3, 'label': 'Initial retail VAT', 'amount': self.initial_vat},
            {'number': 4, 'label': 'Marketable Trade Credit applied', 'amount': self.applied_credit},
            {'number': 5, 'label': 'Retail VAT liability', 'amount': self.vat_liability},
        ]


# =============================================================================
# 계산기
# =============================================================================

def compute_income_tax(tax_input: IncomeTaxInput,
                       rates: IncomeTaxRates = INCOME_TAX_RATES) -> IncomeTaxResult:
    """검증된 입력 구조체로 Form 1 계산"""
    with localcontext() as ctx:
        ctx.prec = _working_precision(tax_input)

        # Line 2: (Line 1 - 8,000) × 50%, 최소 0
        employment_after_deduction = max(ZERO, tax_input.employment_income - rates.employment_deduction)
        presumed_employment = _cents(employment_after_deduction * rates.presumed_income_percentage)

        # Line 4: Line 3 × 50%
        presumed_business = _cents(tax_input.business_income * rates.presumed_income_percentage)

        # Line 5: 보유 법인 배당의 10%
        distribution_deduction = _cents(tax_input.entity_distributions * rates.entity_distribution_deduction_rate)

        # Line 6: Line 2 + Line 4 - Line 5, 최소 0
        aggregate = max(ZERO, presumed_employment + presumed_business - distribution_deduction)

        # Line 7: Line 6 × 10%
        initial_tax = _cents(aggregate * rates.tax_rate)

        # Line 8: MTC는 Line 7을 넘을 수 없음
        applied_credit = min(tax_input.mtc_credit, initial_tax)

        # Line 9
        liability = max(ZERO, initial_tax - applied_credit)

        total_due = liability + tax_input.penalties + tax_input.interest

        return IncomeTaxResult(
            employment_income=tax_input.employment_income,
            presumed_employment_income=presumed_employment,
            business_income=tax_input.business_income,
            presumed_business_income=presumed_business,
            entity_distribution_deduction=distribution_deduction,
            aggregate_presumed_income=aggregate,
            initial_tax=initial_tax,
            requested_credit=tax_input.mtc_credit,
            applied_credit=applied_credit,
            tax_liability=liability,
            penalties=tax_input.penalties,
            interest=tax_input.interest,
            total_due=total_due,
        )


def calculate_income_tax(employment_income, business_income, entity_distributions, mtc_credit,
                         penalties=0, interest=0,
                         rates: IncomeTaxRates = INCOME_TAX_RATES) -> IncomeTaxResult:
    """
    개인 소득세 계산 (Form 1)

    Args:
        employment_income: 근로 소득 (Line 1)
        business_income: 사업 소득 (Line 3)
        entity_distributions: 보유 법인 배당 (Line 5 공제 기준)
        mtc_credit: Marketable Tax Credit 신청액
        penalties, interest: 가산세 / 이자 (마지막에 그대로 합산)
        rates: 적용 세율표

    Returns:
        IncomeTaxResult (모든 라인 포함)

    Raises:
        TaxInputError: 음수 또는 숫자가 아닌 입력
    """
    tax_input = IncomeTaxInput(
        employment_income=employment_income,
        business_income=business_income,
        entity_distributions=entity_distributions,
        mtc_credit=mtc_credit,
        penalties=penalties,
        interest=interest,
    )
    return compute_income_tax(tax_input, rates)


def compute_vat(vat_input: VatInput, rates: VatRates = VAT_RATES) -> VatResult:
    """검증된 입력 구조체로 Form 3 계산"""
    with localcontext() as ctx:
        ctx.prec = _working_precision(vat_input)

        # Line 2: 판매액의 50%를 부가가치로 간주
        value_added = _cents(vat_input.total_retail_sales * rates.value_added_percentage)

        # Line 3: Line 2 × 5%
        initial_vat = _cents(value_added * rates.tax_rate)

        # Line 4: Line 3 상한
        applied_credit = min(vat_input.mtc_credit, initial_vat)

        # Line 5
        liability = max(ZERO, initial_vat - applied_credit)

        return VatResult(
            total_retail_sales=vat_input.total_retail_sales,
            value_added=value_added,
            initial_vat=initial_vat,
            requested_credit=vat_input.mtc_credit,
            applied_credit=applied_credit,
            vat_liability=liability,
            penalties=vat_input.penalties,
            interest=vat_input.interest,
            total_due=liability + vat_input.penalties + vat_input.interest,
        )


def calculate_vat(total_retail_sales, mtc_credit, penalties=0, interest=0,
                  rates: VatRates = VAT_RATES) -> VatResult:
    """
    소매 부가세 계산 (Form 3)

    Raises:
        TaxInputError: 음수 또는 숫자가 아닌 입력
    """
    vat_input = VatInput(
        total_retail_sales=total_retail_sales,
        mtc_credit=mtc_credit,
        penalties=penalties,
        interest=interest,
    )
    return compute_vat(vat_input, rates)


# =============================================================================
# 신고 기간 / 기한
# =============================================================================

QUARTER_START_MONTHS = {1: 1, 2: 4, 3: 7, 4: 10}

INCOME_TAX_DUE_MONTH = 4
INCOME_TAX_DUE_DAY = 30
VAT_DUE_DAYS_AFTER_QUARTER = 15


def get_quarter_dates(year: int, quarter: int) -> Tuple[date, date]:
    """분기 시작일 / 마지막 날 반환"""
    if quarter not in QUARTER_START_MONTHS:
        raise ValueError(f"잘못된 분기: {quarter}")

    start = date(year, QUARTER_START_MONTHS[quarter], 1)
    if quarter == 4:
        end = date(year, 12, 31)
    else:
        end = date(year, QUARTER_START_MONTHS[quarter + 1], 1) - timedelta(days=1)
    return start, end


def get_quarter(day: date) -> int:
    return (day.month - 1) // 3 + 1


def income_tax_due_date(year: int) -> date:
    """소득세 신고 기한: 다음 해 4월 30일"""
    return date(year + 1, INCOME_TAX_DUE_MONTH, INCOME_TAX_DUE_DAY)


def vat_due_date(year: int, quarter: int) -> date:
    """부가세 신고 기한: 분기 종료 후 15일"""
    _, end = get_quarter_dates(year, quarter)
    return end + timedelta(days=VAT_DUE_DAYS_AFTER_QUARTER)


def is_income_tax_past_due(year: int, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return today > income_tax_due_date(year)


def is_vat_past_due(year: int, quarter: int, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return today > vat_due_date(year, quarter)


def current_tax_year(today: Optional[date] = None) -> int:
    """기본 신고 연도 (작년)"""
    today = today or date.today()
    return today.year - 1


def filing_year_choices(today: Optional[date] = None) -> List[int]:
    """신고 가능 연도 (최신순)"""
    today = today or date.today()
    first_year = getattr(settings, 'TAX_FIRST_YEAR', 2020)
    return list(range(today.year, first_year - 1, -1))
