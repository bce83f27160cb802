"""
신고서 입력 / 제출 / 미리보기 폼
"""
from decimal import Decimal

from django import forms

from .models import IncomeTaxReturn, VatReturn
from .utils import current_tax_year, filing_year_choices


MAX_AMOUNT = Decimal('9999999999999.99')

TAXPAYER_FIELDS = [
    'first_name', 'middle_initial', 'last_name', 'accounting_method', 'resident_id', 'email',
]
ADDRESS_FIELDS = ['address_line1', 'city', 'state', 'postal_code', 'country']

TAXPAYER_LABELS = {
    'first_name': 'First name',
    'middle_initial': 'Middle initial',
    'last_name': 'Last name',
    'accounting_method': 'Accounting method',
    'resident_id': '(e)Resident permit number',
    'email': '(e)Residency e-mail',
    'address_line1': 'Home address (number, apt & street)',
    'city': 'City / town / jurisdiction',
    'state': 'Department / state',
    'postal_code': 'Postal code',
    'country': 'Country',
}

AMOUNT_WIDGET_ATTRS = {'class': 'form-control', 'step': '0.01', 'min': '0'}


class TaxReturnFormMixin:
    """
    신고서 폼 공통 처리

    - 연도 선택지 (TAX_FIRST_YEAR ~ 올해)
    - 필수 납세자 필드
    - 금액 0 이상 검증
    - 단계(step)별 필드 묶음 제공 (템플릿 렌더링용)
    """
    required_fields = ['first_name', 'last_name', 'resident_id', 'email',
                       'address_line1', 'city', 'country']
    amount_fields = []
    steps = []

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        year_choices = [(year, str(year)) for year in filing_year_choices()]
        self.fields['tax_year'] = forms.TypedChoiceField(
            label='Tax year',
            choices=year_choices,
            coerce=int,
            initial=current_tax_year(),
            widget=forms.Select(attrs={'class': 'form-select'}),
        )

        for name in self.required_fields:
            if name in self.fields:
                self.fields[name].required = True

        for name in self.amount_fields:
            self.fields[name].required = False
            self.fields[name].widget.attrs.update(AMOUNT_WIDGET_ATTRS)

        for field in self.fields.values():
            existing = field.widget.attrs.get('class', '')
            if 'form-' not in existing:
                field.widget.attrs['class'] = f'{existing} form-control'.strip()

    def clean_middle_initial(self):
        initial = (self.cleaned_data.get('middle_initial') or '').strip()
        if initial and not initial.isalpha():
            raise forms.ValidationError('Middle initial must be a single letter.')
        return initial.upper()

    def _clean_amount(self, name):
        amount = self.cleaned_data.get(name)
        if amount is None:
            return Decimal('0.00')
        if amount < 0:
            raise forms.ValidationError('Amount must be 0 or greater.')
        if amount > MAX_AMOUNT:
            raise forms.ValidationError('Amount is too large.')
        return amount

    def get_steps(self):
        """템플릿에서 단계별로 필드를 그리기 위한 목록"""
        return [
            {
                'number': number,
                'name': name,
                'description': description,
                'fields': [self[field_name] for field_name in field_names if field_name in self.fields],
            }
            for number, (name, description, field_names) in enumerate(self.steps, start=1)
        ]


class IncomeTaxReturnForm(TaxReturnFormMixin, forms.ModelForm):
    """소득세 신고서 폼 (Form 1)"""

    use_tax_preparer = forms.BooleanField(label='I used a tax preparer', required=False)

    amount_fields = ['employment_income', 'business_income', 'entity_distributions', 'mtc_credit']

    steps = [
        ('Taxpayer info', 'Your identification details', TAXPAYER_FIELDS),
        ('Address', 'Your residence details', ADDRESS_FIELDS),
        ('Income', 'Report employment & business income',
         ['tax_year', 'employment_income', 'business_income', 'entity_distributions']),
        ('Tax credits', 'Marketable Tax Credit (MTC)', ['mtc_credit']),
        ('Preparer', 'Tax preparer (optional)',
         ['use_tax_preparer', 'preparer_name', 'preparer_email', 'preparer_phone', 'preparer_address']),
    ]

    class Meta:
        model = IncomeTaxReturn
        fields = TAXPAYER_FIELDS + ADDRESS_FIELDS + [
            'tax_year',
            'employment_income', 'business_income', 'entity_distributions',
            'mtc_credit',
            'preparer_name', 'preparer_email', 'preparer_phone', 'preparer_address',
        ]
        labels = {
            **TAXPAYER_LABELS,
            'employment_income': 'Line 1: Revenue from employment',
            'business_income': 'Line 3: Revenue from business',
            'entity_distributions': 'Distributions from owned companies',
            'mtc_credit': 'Line 8: Marketable Tax Credit',
            'preparer_name': 'Preparer name',
            'preparer_email': 'Preparer e-mail',
            'preparer_phone': 'Preparer phone',
            'preparer_address': 'Preparer address',
        }
        help_texts = {
            'employment_income': 'Wages, salary and other compensation.',
            'business_income': 'Royalties, dividends and distributions.',
            'entity_distributions': '10% of distributions from companies you own is deducted (Line 5).',
            'mtc_credit': 'Attach MTC forms. The credit cannot exceed Line 7.',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and self.instance.preparer_name:
            self.fields['use_tax_preparer'].initial = True

    def clean_employment_income(self):
        return self._clean_amount('employment_income')

    def clean_business_income(self):
        return self._clean_amount('business_income')

    def clean_entity_distributions(self):
        return self._clean_amount('entity_distributions')

    def clean_mtc_credit(self):
        return self._clean_amount('mtc_credit')

    def clean(self):
        cleaned_data = super().clean()

        # 세무 대리인 사용 시 이름 필수
        if cleaned_data.get('use_tax_preparer'):
            if not (cleaned_data.get('preparer_name') or '').strip():
                self.add_error('preparer_name', 'Preparer name is required when using a tax preparer.')
        else:
            for name in ('preparer_name', 'preparer_email', 'preparer_phone', 'preparer_address'):
                cleaned_data[name] = ''

        # 같은 연도 신고서 중복 방지
        tax_year = cleaned_data.get('tax_year')
        if self.user and tax_year:
            duplicate = IncomeTaxReturn.objects.filter(user=self.user, tax_year=tax_year)
            if self.instance.pk:
                duplicate = duplicate.exclude(pk=self.instance.pk)
            if duplicate.exists():
                self.add_error('tax_year', f'A return for tax year {tax_year} already exists.')

        return cleaned_data


class VatReturnForm(TaxReturnFormMixin, forms.ModelForm):
    """부가세 신고서 폼 (Form 3)"""

    QUARTER_CHOICES = [(1, 'Q1 (Jan-Mar)'), (2, 'Q2 (Apr-Jun)'), (3, 'Q3 (Jul-Sep)'), (4, 'Q4 (Oct-Dec)')]

    amount_fields = ['total_retail_sales', 'mtc_credit']

    steps = [
        ('Taxpayer info', 'Your identification details',
         ['first_name', 'middle_initial', 'last_name', 'accounting_method', 'resident_id']),
        ('Address', 'Your residence details', ADDRESS_FIELDS + ['email']),
        ('Tax period', 'Select the quarter', ['tax_year', 'quarter']),
        ('Retail sales', 'Report sales value', ['total_retail_sales']),
        ('Tax credits', 'Marketable Trade Credit (MTC)', ['mtc_credit']),
    ]

    class Meta:
        model = VatReturn
        fields = TAXPAYER_FIELDS + ADDRESS_FIELDS + [
            'tax_year', 'quarter', 'total_retail_sales', 'mtc_credit',
        ]
        labels = {
            **TAXPAYER_LABELS,
            'quarter': 'Quarter',
            'total_retail_sales': 'Line 1: Value received for sale of goods and services',
            'mtc_credit': 'Line 4: Marketable Trade Credit',
        }
        help_texts = {
            'mtc_credit': 'Attach MTC forms. The credit cannot exceed Line 3.',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['quarter'] = forms.TypedChoiceField(
            label='Quarter',
            choices=self.QUARTER_CHOICES,
            coerce=int,
            widget=forms.Select(attrs={'class': 'form-select'}),
        )

    def clean_total_retail_sales(self):
        return self._clean_amount('total_retail_sales')

    def clean_mtc_credit(self):
        return self._clean_amount('mtc_credit')

    def clean(self):
        cleaned_data = super().clean()

        # 같은 분기 신고서 중복 방지
        tax_year = cleaned_data.get('tax_year')
        quarter = cleaned_data.get('quarter')
        if self.user and tax_year and quarter:
            duplicate = VatReturn.objects.filter(user=self.user, tax_year=tax_year, quarter=quarter)
            if self.instance.pk:
                duplicate = duplicate.exclude(pk=self.instance.pk)
            if duplicate.exists():
                self.add_error('quarter', f'A return for {tax_year} Q{quarter} already exists.')

        return cleaned_data


class SubmitReturnForm(forms.Form):
    """서명 및 제출 폼"""

    certification_accepted = forms.BooleanField(
        label=(
            'Under penalties of perjury, I declare that I have examined this return '
            'and to the best of my knowledge it is true, correct and complete.'
        ),
        required=True,
        error_messages={'required': 'You must certify that the information is accurate.'},
    )
    signature_data = forms.CharField(
        widget=forms.HiddenInput(),
        error_messages={'required': 'Signature is required.'},
    )

    def clean_signature_data(self):
        signature = (self.cleaned_data.get('signature_data') or '').strip()
        if not signature:
            raise forms.ValidationError('Signature is required.')
        return signature


class PreviewAmountField(forms.DecimalField):
    """미리보기용 금액 필드 (빈 값 = 0, 음수 불가)"""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('min_value', Decimal('0'))
        kwargs.setdefault('max_value', MAX_AMOUNT)
        kwargs.setdefault('max_digits', 15)
        kwargs.setdefault('decimal_places', 2)
        super().__init__(**kwargs)

    def clean(self, value):
        value = super().clean(value)
        return Decimal('0.00') if value is None else value


class IncomeTaxPreviewForm(forms.Form):
    """소득세 실시간 계산 입력"""
    employment_income = PreviewAmountField()
    business_income = PreviewAmountField()
    entity_distributions = PreviewAmountField()
    mtc_credit = PreviewAmountField()
    penalties = PreviewAmountField()
    interest = PreviewAmountField()


class VatPreviewForm(forms.Form):
    """부가세 실시간 계산 입력"""
    total_retail_sales = PreviewAmountField()
    mtc_credit = PreviewAmountField()
    penalties = PreviewAmountField()
    interest = PreviewAmountField()
