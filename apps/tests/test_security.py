import pytest
from decimal import Decimal
from django.urls import reverse
from django.contrib.auth.models import User

from apps.tax.models import IncomeTaxReturn, TaxReturnStatus, VatReturn


@pytest.mark.django_db
class TestSecurity:

    # --- 1. 인증 테스트 (Authentication) ---

    def test_unauthenticated_user_redirected_from_dashboard(self, client):
        """로그인 안 한 사용자가 대시보드 접근 시 로그인 페이지로 튕기는지"""
        response = client.get(reverse('dashboard:index'))
        assert response.status_code == 302
        assert '/login/' in response.url

    def test_unauthenticated_user_cannot_edit_profile(self, client):
        response = client.get(reverse('accounts:profile_edit'))
        assert response.status_code == 302

    # --- 2. 인가/권한 테스트 (Authorization) ---

    def test_user_cannot_modify_others_vat_return(self, client):
        """A 사용자가 B 사용자의 신고서를 수정/제출/삭제할 수 없는지 (보안 핵심)"""
        User.objects.create_user(username='user_a', password='pass123')
        user_b = User.objects.create_user(username='user_b', password='pass123')
        vat_b = VatReturn.objects.create(
            user=user_b, tax_year=2024, quarter=2, total_retail_sales=Decimal('1000')
        )

        client.login(username='user_a', password='pass123')

        urls = [
            reverse('tax:vat_detail', kwargs={'pk': vat_b.pk}),
            reverse('tax:vat_update', kwargs={'pk': vat_b.pk}),
            reverse('tax:vat_delete', kwargs={'pk': vat_b.pk}),
        ]
        for url in urls:
            # 실패(404)해야 성공! 200이 뜨면 보안 구멍
            assert client.get(url).status_code == 404

        response = client.post(
            reverse('tax:vat_submit', kwargs={'pk': vat_b.pk}),
            {'certification_accepted': 'on', 'signature_data': 'user_a'},
        )
        assert response.status_code == 404

        vat_b.refresh_from_db()
        assert vat_b.status == TaxReturnStatus.DRAFT

    def test_export_contains_only_own_returns(self, client):
        user_a = User.objects.create_user(username='user_a', password='pass123')
        user_b = User.objects.create_user(username='user_b', password='pass123')
        IncomeTaxReturn.objects.create(user=user_b, tax_year=2023, employment_income=Decimal('90000'))

        client.login(username='user_a', password='pass123')
        response = client.get(reverse('tax:export_returns'))

        assert response.status_code == 200
        assert f'tax_returns_{user_a.username}_' in response['Content-Disposition']
        assert 'user_b' not in response['Content-Disposition']

    def test_normal_user_cannot_open_admin(self, client):
        User.objects.create_user(username='tester', password='pass123')
        client.login(username='tester', password='pass123')

        response = client.get('/admin/tax/incometaxreturn/')
        assert response.status_code == 302
        assert '/admin/login/' in response.url

    # --- 3. 회원가입/로그인 보안 ---

    def test_authenticated_user_cannot_signup_again(self, client):
        """이미 로그인한 사용자가 회원가입 페이지로 가려고 하면 대시보드로 튕기는지"""
        User.objects.create_user(username='tester', password='pass123')
        client.login(username='tester', password='pass123')

        response = client.get(reverse('accounts:signup'))

        assert response.status_code == 302
        assert response.url == reverse('dashboard:index')
