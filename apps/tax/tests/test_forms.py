"""
Tax Forms 테스트 (Pytest)
"""
import pytest
from datetime import date
from decimal import Decimal

from apps.tax.forms import (
    IncomeTaxPreviewForm,
    IncomeTaxReturnForm,
    SubmitReturnForm,
    VatPreviewForm,
    VatReturnForm,
)


def income_form_data(taxpayer_data, **overrides):
    data = {
        **taxpayer_data,
        'tax_year': date.today().year - 1,
        'employment_income': '50000',
        'business_income': '',
        'entity_distributions': '',
        'mtc_credit': '0',
    }
    data.update(overrides)
    return data


def vat_form_data(taxpayer_data, **overrides):
    data = {
        **taxpayer_data,
        'tax_year': date.today().year,
        'quarter': '1',
        'total_retail_sales': '100000',
        'mtc_credit': '',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestIncomeTaxReturnForm:

    def test_valid_form(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data), user=user)

        assert form.is_valid(), form.errors
        # 빈 금액은 0
        assert form.cleaned_data['business_income'] == Decimal('0.00')

    def test_save_calculates(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data), user=user)
        assert form.is_valid(), form.errors

        tax_return = form.save(commit=False)
        tax_return.user = user
        tax_return.save()

        assert tax_return.total_due == Decimal('2100.00')

    @pytest.mark.parametrize("field", ['first_name', 'last_name', 'resident_id', 'email', 'city'])
    def test_required_taxpayer_fields(self, user, taxpayer_data, field):
        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data, **{field: ''}), user=user)

        assert not form.is_valid()
        assert field in form.errors

    def test_state_and_postal_code_optional(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, state='', postal_code=''), user=user
        )
        assert form.is_valid(), form.errors

        form = VatReturnForm(data=vat_form_data(taxpayer_data, state='', postal_code=''), user=user)
        assert form.is_valid(), form.errors

    def test_negative_amount_rejected(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, employment_income='-100'), user=user
        )
        assert not form.is_valid()
        assert 'employment_income' in form.errors

    def test_middle_initial_single_letter(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data, middle_initial='7'), user=user)
        assert not form.is_valid()
        assert 'middle_initial' in form.errors

        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data, middle_initial='m'), user=user)
        assert form.is_valid(), form.errors
        assert form.cleaned_data['middle_initial'] == 'M'

    def test_year_outside_choices_rejected(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(data=income_form_data(taxpayer_data, tax_year='1999'), user=user)
        assert not form.is_valid()
        assert 'tax_year' in form.errors

    def test_preparer_name_required_when_used(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, use_tax_preparer='on', preparer_name=''), user=user
        )
        assert not form.is_valid()
        assert 'preparer_name' in form.errors

    def test_preparer_fields_cleared_when_not_used(self, user, taxpayer_data):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, preparer_name='Someone'), user=user
        )
        assert form.is_valid(), form.errors
        assert form.cleaned_data['preparer_name'] == ''

    def test_duplicate_year_rejected(self, user, taxpayer_data, income_return):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, tax_year=income_return.tax_year), user=user
        )
        assert not form.is_valid()
        assert 'tax_year' in form.errors

    def test_editing_same_return_is_not_duplicate(self, user, taxpayer_data, income_return):
        form = IncomeTaxReturnForm(
            data=income_form_data(taxpayer_data, tax_year=income_return.tax_year),
            instance=income_return,
            user=user,
        )
        assert form.is_valid(), form.errors

    def test_steps(self, user):
        form = IncomeTaxReturnForm(user=user)
        steps = form.get_steps()

        assert [step['number'] for step in steps] == [1, 2, 3, 4, 5]
        assert steps[0]['name'] == 'Taxpayer info'
        income_fields = [bound.name for bound in steps[2]['fields']]
        assert 'employment_income' in income_fields


@pytest.mark.django_db
class TestVatReturnForm:

    def test_valid_form(self, user, taxpayer_data):
        form = VatReturnForm(data=vat_form_data(taxpayer_data), user=user)

        assert form.is_valid(), form.errors
        assert form.cleaned_data['quarter'] == 1
        assert form.cleaned_data['mtc_credit'] == Decimal('0.00')

    @pytest.mark.parametrize("quarter", ['0', '5', 'x'])
    def test_invalid_quarter(self, user, taxpayer_data, quarter):
        form = VatReturnForm(data=vat_form_data(taxpayer_data, quarter=quarter), user=user)
        assert not form.is_valid()
        assert 'quarter' in form.errors

    def test_duplicate_quarter_rejected(self, user, taxpayer_data, vat_return):
        form = VatReturnForm(
            data=vat_form_data(taxpayer_data, tax_year=vat_return.tax_year, quarter=vat_return.quarter),
            user=user,
        )
        assert not form.is_valid()
        assert 'quarter' in form.errors


class TestSubmitReturnForm:

    def test_valid(self):
        form = SubmitReturnForm(data={'certification_accepted': 'on', 'signature_data': 'Ana Lopez'})
        assert form.is_valid()

    def test_certification_required(self):
        form = SubmitReturnForm(data={'signature_data': 'Ana Lopez'})
        assert not form.is_valid()
        assert 'certification_accepted' in form.errors

    def test_blank_signature_rejected(self):
        form = SubmitReturnForm(data={'certification_accepted': 'on', 'signature_data': '   '})
        assert not form.is_valid()
        assert 'signature_data' in form.errors


class TestPreviewForms:

    def test_blank_is_zero(self):
        form = IncomeTaxPreviewForm(data={'employment_income': '50000'})

        assert form.is_valid()
        assert form.cleaned_data['business_income'] == Decimal('0.00')
        assert form.cleaned_data['penalties'] == Decimal('0.00')

    def test_negative_rejected(self):
        form = VatPreviewForm(data={'total_retail_sales': '-1'})
        assert not form.is_valid()
        assert 'total_retail_sales' in form.errors

    def test_not_a_number(self):
        form = VatPreviewForm(data={'total_retail_sales': 'abc'})
        assert not form.is_valid()
