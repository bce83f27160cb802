import pytest
from django.contrib.auth.models import User


@pytest.fixture
def test_user(db):
    """테스트용 유저 생성"""
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='password123',
        first_name='Ana',
        last_name='Lopez'
    )


@pytest.fixture
def auth_client(client, test_user):
    """로그인된 클라이언트 제공"""
    client.login(username='testuser', password='password123')
    return client
