import pytest
from django.contrib.auth.models import User

from apps.accounts.forms import CustomUserCreationForm, ProfileForm


PROFILE_DATA = {
    'first_name': 'Maria',
    'last_name': 'Reyes',
    'middle_initial': 'j',
    'resident_id': 'pr-2024-00001',
    'phone': '+504 9999-0000',
    'address_line1': '1 Pristine Bay',
    'city': 'Roatan',
    'state': 'Islas de la Bahia',
    'postal_code': '34101',
    'country': 'Honduras',
}


@pytest.mark.django_db
class TestProfileForm:

    def test_save_updates_user_and_profile(self, test_user):
        form = ProfileForm(data=PROFILE_DATA, instance=test_user.profile)
        assert form.is_valid(), form.errors

        profile = form.save()
        test_user.refresh_from_db()

        assert test_user.first_name == 'Maria'
        assert test_user.last_name == 'Reyes'
        assert profile.middle_initial == 'J'
        assert profile.resident_id == 'PR-2024-00001'

    def test_initial_names_from_user(self, test_user):
        form = ProfileForm(instance=test_user.profile)
        assert form.fields['first_name'].initial == 'Ana'

    def test_duplicate_resident_id(self, test_user):
        other = User.objects.create_user(username='otheruser', password='password123')
        other.profile.resident_id = 'PR-2024-00001'
        other.profile.save()

        form = ProfileForm(data=PROFILE_DATA, instance=test_user.profile)
        assert not form.is_valid()
        assert 'resident_id' in form.errors

    @pytest.mark.parametrize("field,value", [
        ('middle_initial', '1'),
        ('phone', 'call me'),
        ('resident_id', 'PR 2024'),
    ])
    def test_invalid_values(self, test_user, field, value):
        form = ProfileForm(data={**PROFILE_DATA, field: value}, instance=test_user.profile)
        assert not form.is_valid()
        assert field in form.errors


@pytest.mark.django_db
class TestCustomUserCreationForm:

    def signup_data(self, **overrides):
        data = {
            'username': 'newuser1',
            'email': 'new@example.com',
            'password1': 'Sup3r-Secret-Pass',
            'password2': 'Sup3r-Secret-Pass',
        }
        data.update(overrides)
        return data

    def test_valid(self):
        form = CustomUserCreationForm(data=self.signup_data())
        assert form.is_valid(), form.errors

        user = form.save()
        assert user.email == 'new@example.com'

    @pytest.mark.parametrize("username", ['abc', 'a' * 21, 'bad_name!'])
    def test_invalid_username(self, username):
        form = CustomUserCreationForm(data=self.signup_data(username=username))
        assert not form.is_valid()
        assert 'username' in form.errors

    def test_duplicate_email(self, test_user):
        form = CustomUserCreationForm(data=self.signup_data(email='TEST@example.com'))
        assert not form.is_valid()
        assert 'email' in form.errors
