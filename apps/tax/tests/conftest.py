# =============================================================================
# conftest.py - tax 앱 공통 Fixtures
# =============================================================================

import pytest
from decimal import Decimal
from django.contrib.auth.models import User

from apps.tax.models import IncomeTaxReturn, VatReturn


TAXPAYER_DATA = {
    'first_name': 'Ana',
    'middle_initial': 'M',
    'last_name': 'Lopez',
    'resident_id': 'PR-2024-12345',
    'email': 'ana@example.com',
    'accounting_method': 'CASH',
    'address_line1': '1 Pristine Bay',
    'city': 'Roatan',
    'state': 'Islas de la Bahia',
    'postal_code': '34101',
    'country': 'Honduras',
}


@pytest.fixture
def user(db):
    """기본 테스트 사용자"""
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='testpass123',
        first_name='Ana',
        last_name='Lopez'
    )


@pytest.fixture
def other_user(db):
    """다른 테스트 사용자"""
    return User.objects.create_user(
        username='otheruser',
        email='other@example.com',
        password='testpass123'
    )


@pytest.fixture
def authenticated_client(client, user):
    """로그인된 클라이언트"""
    client.login(username='testuser', password='testpass123')
    client.user = user  # 편의를 위해 user 속성 추가
    return client


@pytest.fixture
def taxpayer_data():
    return dict(TAXPAYER_DATA)


@pytest.fixture
def income_return(user):
    """DRAFT 소득세 신고서 (근로소득 50,000)"""
    return IncomeTaxReturn.objects.create(
        user=user,
        tax_year=2023,
        employment_income=Decimal('50000.00'),
        **TAXPAYER_DATA
    )


@pytest.fixture
def vat_return(user):
    """DRAFT 부가세 신고서 (2024 Q1, 판매액 100,000)"""
    return VatReturn.objects.create(
        user=user,
        tax_year=2024,
        quarter=1,
        total_retail_sales=Decimal('100000.00'),
        **TAXPAYER_DATA
    )


@pytest.fixture
def submitted_income_return(income_return):
    income_return.submit('Ana M. Lopez')
    return income_return


@pytest.fixture
def other_income_return(other_user):
    """다른 사용자의 신고서"""
    return IncomeTaxReturn.objects.create(
        user=other_user,
        tax_year=2023,
        employment_income=Decimal('20000.00'),
        **TAXPAYER_DATA
    )
