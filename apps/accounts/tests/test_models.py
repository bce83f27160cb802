import pytest
from django.contrib.auth.models import User
from django.db import IntegrityError

from apps.accounts.models import Profile


@pytest.mark.django_db
class TestProfileModel:

    def test_profile_created_with_user(self, test_user):
        """User 생성 시 Profile 자동 생성 (signals)"""
        assert Profile.objects.filter(user=test_user).count() == 1
        assert test_user.profile.country == 'Honduras'
        assert str(test_user.profile) == 'testuser profile'

    def test_saving_user_does_not_duplicate_profile(self, test_user):
        test_user.first_name = 'Maria'
        test_user.save()
        assert Profile.objects.filter(user=test_user).count() == 1

    @pytest.mark.parametrize("resident_id,expected", [
        ('', '-'),
        ('1234', '****'),
        ('PR-2024-12345', '*********2345'),
    ])
    def test_masked_resident_id(self, test_user, resident_id, expected):
        test_user.profile.resident_id = resident_id
        assert test_user.profile.get_masked_resident_id() == expected

    def test_return_initial(self, test_user):
        profile = test_user.profile
        profile.resident_id = 'PR-1'
        profile.city = 'Roatan'
        profile.save()

        initial = profile.get_return_initial()

        assert initial['first_name'] == 'Ana'
        assert initial['last_name'] == 'Lopez'
        assert initial['email'] == 'test@example.com'
        assert initial['resident_id'] == 'PR-1'
        assert initial['city'] == 'Roatan'

    def test_resident_id_unique_when_set(self, test_user):
        test_user.profile.resident_id = 'PR-1'
        test_user.profile.save()

        other = User.objects.create_user(username='otheruser', password='password123')
        other.profile.resident_id = 'PR-1'
        with pytest.raises(IntegrityError):
            other.profile.save()

    def test_blank_resident_ids_allowed(self, test_user):
        other = User.objects.create_user(username='otheruser', password='password123')
        assert test_user.profile.resident_id == ''
        assert other.profile.resident_id == ''
