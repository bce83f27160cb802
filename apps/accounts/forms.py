from django import forms
from .models import Profile
from django.contrib.auth.forms import UserCreationForm
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
import re


class ProfileForm(forms.ModelForm):
    first_name = forms.CharField(label='First name', max_length=150, required=True)
    last_name = forms.CharField(label='Last name', max_length=150, required=True)

    class Meta:
        model = Profile
        fields = [
            'first_name', 'middle_initial', 'last_name', 'resident_id', 'phone',
            'address_line1', 'city', 'state', 'postal_code', 'country',
        ]
        labels = {
            'middle_initial': 'Middle initial',
            'resident_id': '(e)Resident permit number',
            'phone': 'Phone',
            'address_line1': 'Home address (number, apt & street)',
            'city': 'City / town / jurisdiction',
            'state': 'Department / state',
            'postal_code': 'Postal code',
            'country': 'Country',
        }
        widgets = {
            'resident_id': forms.TextInput(attrs={'placeholder': 'PR-2024-12345'}),
            'middle_initial': forms.TextInput(attrs={'maxlength': '1'}),
        }

    def __init__(self, *args, **kwargs):
        """모든 필드에 부트스트랩 클래스 주입"""
        super().__init__(*args, **kwargs)
        if self.instance and self.instance.user_id:
            # 이름은 User 모델에 저장
            self.fields['first_name'].initial = self.instance.user.first_name
            self.fields['last_name'].initial = self.instance.user.last_name

        for field in self.fields.values():
            existing_classes = field.widget.attrs.get('class', '')
            field.widget.attrs['class'] = f'{existing_classes} form-control'.strip()

    def clean_middle_initial(self):
        initial = self.cleaned_data.get('middle_initial', '').strip()
        if initial and not initial.isalpha():
            raise forms.ValidationError('Middle initial must be a letter.')
        return initial.upper()

    def clean_resident_id(self):
        resident_id = self.cleaned_data.get('resident_id', '').strip().upper()
        if not resident_id:
            return resident_id

        # 현재 수정 중인 내 프로필은 제외하고 검색
        exists = Profile.objects.exclude(user=self.instance.user).filter(
            resident_id=resident_id
        ).exists()
        if exists:
            raise forms.ValidationError('This resident ID is already registered.')

        return resident_id

    def save(self, commit=True):
        profile = super().save(commit=False)
        user = profile.user
        user.first_name = self.cleaned_data['first_name']
        user.last_name = self.cleaned_data['last_name']
        if commit:
            user.save()
            profile.save()
        return profile


class CustomUserCreationForm(UserCreationForm):
    """
    커스텀 회원가입 폼
    - 이메일 필드 추가 (필수, 신고서 연락처로 사용)
    - 이메일 중복 검증
    """
    email = forms.EmailField(
        required=True,
        label='Email',
        widget=forms.EmailInput(attrs={
            'class': 'form-input-field',
            'placeholder': 'example@email.com',
            'autocomplete': 'email'
        }),
        help_text='Used for filing confirmations.'
    )

    class Meta:
        model = User
        fields = ('username', 'email', 'password1', 'password2')

    def clean_username(self):
        """아이디 검증"""
        username = self.cleaned_data.get('username')

        if len(username) < 4:
            raise ValidationError('Username must be at least 4 characters.')
        if len(username) > 20:
            raise ValidationError('Username must be at most 20 characters.')

        # 영문, 숫자만 허용
        if not re.match(r'^[a-zA-Z0-9]+$', username):
            raise ValidationError('Username may only contain letters and digits.')

        if User.objects.filter(username=username).exists():
            raise ValidationError('This username is already taken.')

        return username

    def clean_email(self):
        """이메일 중복 확인"""
        email = self.cleaned_data.get('email')

        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError('This email is already registered.')

        return email

    def save(self, commit=True):
        """이메일 포함하여 사용자 저장"""
        user = super().save(commit=False)
        user.email = self.cleaned_data['email']

        if commit:
            user.save()

        return user
