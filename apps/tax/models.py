"""
세금 신고서 모델

- IncomeTaxReturn: 개인 소득세 신고서 (Form 1, 연간)
- VatReturn: 소매 부가세 신고서 (Form 3, 분기)

신고서는 DRAFT 상태에서만 수정/삭제할 수 있습니다.
DRAFT 저장 시 계산기를 한 번 실행하고 결과 라인을 각 컬럼에 펼쳐 저장합니다.
제출(SUBMITTED) 이후에는 다시 계산하지 않습니다.
"""
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.utils import timezone

from apps.core.models import UserOwnedModel
from .utils import (
    IncomeTaxInput,
    IncomeTaxResult,
    VatResult,
    VatInput,
    TaxInputError,
    compute_income_tax,
    compute_vat,
    get_income_tax_rates,
    get_vat_rates,
    get_quarter_dates,
    income_tax_due_date,
    vat_due_date,
)

logger = logging.getLogger(__name__)


def money_field(**kwargs):
    """금액 컬럼 공통 정의"""
    kwargs.setdefault('default', Decimal('0.00'))
    return models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        **kwargs
    )


class TaxReturnStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    SUBMITTED = 'SUBMITTED', 'Submitted'
    UNDER_REVIEW = 'UNDER_REVIEW', 'Under review'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    AMENDED = 'AMENDED', 'Amended'


class AccountingMethod(models.TextChoices):
    CASH = 'CASH', 'Cash'
    ACCRUAL = 'ACCRUAL', 'Accrual'


class TaxReturnQuerySet(models.QuerySet):
    """신고서 공통 QuerySet"""
    def drafts(self):
        return self.filter(status=TaxReturnStatus.DRAFT)

    def submitted(self):
        return self.exclude(status=TaxReturnStatus.DRAFT)

    def for_user(self, user):
        return self.filter(user=user)


class TaxReturn(UserOwnedModel):
    """
    신고서 추상 모델

    납세자 정보는 제출 시점의 스냅샷으로 신고서에 직접 저장합니다.
    (프로필이 바뀌어도 제출된 신고서 내용은 유지)
    """
    tax_year = models.PositiveIntegerField(db_index=True)
    status = models.CharField(
        max_length=20,
        choices=TaxReturnStatus.choices,
        default=TaxReturnStatus.DRAFT,
        db_index=True
    )

    # 납세자 정보
    first_name = models.CharField(max_length=100, blank=True)
    middle_initial = models.CharField(max_length=1, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    resident_id = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    accounting_method = models.CharField(
        max_length=10,
        choices=AccountingMethod.choices,
        default=AccountingMethod.CASH
    )

    # 주소
    address_line1 = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, blank=True, default='Honduras')

    # 공통 입력값
    mtc_credit = money_field()
    penalties = money_field()
    interest = money_field()

    # 공통 계산값
    applied_credit = money_field()
    total_due = money_field()

    # 서명 / 제출
    signature_data = models.TextField(blank=True)
    signed_at = models.DateTimeField(null=True, blank=True)
    certification_accepted = models.BooleanField(default=False)
    submitted_at = models.DateTimeField(null=True, blank=True)

    objects = TaxReturnQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_editable(self):
        return self.status == TaxReturnStatus.DRAFT

    @property
    def taxpayer_name(self):
        parts = [self.first_name, f"{self.middle_initial}." if self.middle_initial else '', self.last_name]
        return ' '.join(p for p in parts if p)

    @property
    def is_past_due(self):
        return timezone.localdate() > self.due_date

    @property
    def credit_capped(self):
        return self.mtc_credit > self.applied_credit

    def recalculate(self):
        """계산기 실행 후 결과를 컬럼에 반영 (하위 클래스 구현)"""
        raise NotImplementedError

    @transaction.atomic
    def save(self, *args, **kwargs):
        if self.is_editable:
            try:
                self.recalculate()
            except TaxInputError as e:
                raise ValidationError({e.field: str(e)})
        self.full_clean()
        super().save(*args, **kwargs)

    def submit(self, signature_data):
        """
        신고서 제출 (DRAFT → SUBMITTED)

        Raises:
            ValidationError: 이미 제출됨 / 서명 누락
        """
        if not self.is_editable:
            raise ValidationError('Return already submitted.')
        if not signature_data:
            raise ValidationError({'signature_data': 'Signature is required.'})

        # 제출 직전 마지막으로 한 번 더 계산 (save에서 처리)
        self.save()

        now = timezone.now()
        self.status = TaxReturnStatus.SUBMITTED
        self.signature_data = signature_data
        self.signed_at = now
        self.submitted_at = now
        self.certification_accepted = True
        self.save()

        logger.info(
            f"신고서 제출: type={self.return_type}, id={self.pk}, "
            f"user={self.user_id}, total_due={self.total_due}"
        )

    def delete(self, *args, **kwargs):
        if not self.is_editable:
            raise ValidationError('Cannot delete a submitted return.')
        return super().delete(*args, **kwargs)


class IncomeTaxReturn(TaxReturn):
    """개인 소득세 신고서 (Form 1)"""

    return_type = 'income'

    # 입력값 (Line 1, 3, 5)
    employment_income = money_field()
    business_income = money_field()
    entity_distributions = money_field()
    income_sources = models.JSONField(default=list, blank=True)

    # 계산값 (Line 2, 4, 5, 6, 7, 9)
    presumed_employment_income = money_field()
    presumed_business_income = money_field()
    entity_distribution_deduction = money_field()
    aggregate_presumed_income = money_field()
    initial_tax = money_field()
    tax_liability = money_field()

    # 세무 대리인 (선택)
    preparer_name = models.CharField(max_length=200, blank=True)
    preparer_email = models.EmailField(blank=True)
    preparer_phone = models.CharField(max_length=30, blank=True)
    preparer_address = models.CharField(max_length=300, blank=True)

    class Meta:
        db_table = 'income_tax_returns'
        ordering = ['-tax_year']
        indexes = [
            models.Index(fields=['user', 'status'], name='income_tax_user_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'tax_year'],
                name='unique_income_tax_return_per_year'
            ),
            models.CheckConstraint(
                condition=models.Q(total_due__gte=0),
                name='income_tax_total_due_non_negative'
            ),
        ]

    def __str__(self):
        return f"Income tax {self.tax_year} ({self.get_status_display()})"

    @property
    def gross_income(self):
        return self.employment_income + self.business_income

    @property
    def due_date(self):
        return income_tax_due_date(self.tax_year)

    def to_input(self):
        return IncomeTaxInput(
            employment_income=self.employment_income,
            business_income=self.business_income,
            entity_distributions=self.entity_distributions,
            mtc_credit=self.mtc_credit,
            penalties=self.penalties,
            interest=self.interest,
        )

    def calculation(self):
        """현재 입력값 기준 계산 결과 (저장하지 않음)"""
        return compute_income_tax(self.to_input(), get_income_tax_rates(self.tax_year))

    def stored_result(self):
        """저장된 라인 컬럼으로 결과 구성 (재계산 없음)"""
        return IncomeTaxResult(
            employment_income=self.employment_income,
            presumed_employment_income=self.presumed_employment_income,
            business_income=self.business_income,
            presumed_business_income=self.presumed_business_income,
            entity_distribution_deduction=self.entity_distribution_deduction,
            aggregate_presumed_income=self.aggregate_presumed_income,
            initial_tax=self.initial_tax,
            requested_credit=self.mtc_credit,
            applied_credit=self.applied_credit,
            tax_liability=self.tax_liability,
            penalties=self.penalties,
            interest=self.interest,
            total_due=self.total_due,
        )

    def recalculate(self):
        result = self.calculation()
        self.presumed_employment_income = result.presumed_employment_income
        self.presumed_business_income = result.presumed_business_income
        self.entity_distribution_deduction = result.entity_distribution_deduction
        self.aggregate_presumed_income = result.aggregate_presumed_income
        self.initial_tax = result.initial_tax
        self.applied_credit = result.applied_credit
        self.tax_liability = result.tax_liability
        self.total_due = result.total_due
        return result


class VatReturn(TaxReturn):
    """소매 부가세 신고서 (Form 3)"""

    return_type = 'vat'

    quarter = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)]
    )
    period_start = models.DateField(null=True, blank=True)
    period_end = models.DateField(null=True, blank=True)

    # 입력값 (Line 1)
    total_retail_sales = money_field()
    sales_breakdown = models.JSONField(default=list, blank=True)

    # 계산값 (Line 2, 3, 5)
    value_added = money_field()
    initial_vat = money_field()
    vat_liability = money_field()

    class Meta:
        db_table = 'vat_returns'
        ordering = ['-tax_year', '-quarter']
        indexes = [
            models.Index(fields=['user', 'status'], name='vat_user_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'tax_year', 'quarter'],
                name='unique_vat_return_per_quarter'
            ),
            models.CheckConstraint(
                condition=models.Q(quarter__gte=1, quarter__lte=4),
                name='vat_return_quarter_range'
            ),
            models.CheckConstraint(
                condition=models.Q(total_due__gte=0),
                name='vat_total_due_non_negative'
            ),
        ]

    def __str__(self):
        return f"VAT {self.tax_year} Q{self.quarter} ({self.get_status_display()})"

    @property
    def due_date(self):
        return vat_due_date(self.tax_year, self.quarter)

    def to_input(self):
        return VatInput(
            total_retail_sales=self.total_retail_sales,
            mtc_credit=self.mtc_credit,
            penalties=self.penalties,
            interest=self.interest,
        )

    def calculation(self):
        return compute_vat(self.to_input(), get_vat_rates(self.tax_year))

    def stored_result(self):
        return VatResult(
            total_retail_sales=self.total_retail_sales,
            value_added=self.value_added,
            initial_vat=self.initial_vat,
            requested_credit=self.mtc_credit,
            applied_credit=self.applied_credit,
            vat_liability=self.vat_liability,
            penalties=self.penalties,
            interest=self.interest,
            total_due=self.total_due,
        )

    def recalculate(self):
        if self.quarter in (1, 2, 3, 4):
            self.period_start, self.period_end = get_quarter_dates(self.tax_year, self.quarter)

        result = self.calculation()
        self.value_added = result.value_added
        self.initial_vat = result.initial_vat
        self.applied_credit = result.applied_credit
        self.vat_liability = result.vat_liability
        self.total_due = result.total_due
        return result
