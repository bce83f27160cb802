"""
납세자 프로필

Django 기본 User 모델을 확장하여 거주자 정보와 주소를 저장합니다.
신고서 작성 시 초기값으로 사용됩니다.
"""
from django.db import models
from django.contrib.auth.models import User
from django.core.validators import RegexValidator
from apps.core.models import TimeStampedModel


# 공통 검증 패턴
PHONE_VALIDATOR = RegexValidator(
    regex=r'^[0-9\-\+\(\)\s]+$',
    message='Enter a valid phone number.'
)

RESIDENT_ID_VALIDATOR = RegexValidator(
    regex=r'^[A-Za-z0-9\-]+$',
    message='Resident ID may only contain letters, digits and hyphens.'
)


class Profile(TimeStampedModel):
    """납세자 프로필 (Django User 확장)"""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    resident_id = models.CharField(
        max_length=50,
        blank=True,
        validators=[RESIDENT_ID_VALIDATOR],
        verbose_name='Resident permit number'
    )
    middle_initial = models.CharField(max_length=1, blank=True)
    phone = models.CharField(max_length=20, blank=True, validators=[PHONE_VALIDATOR])

    # 주소
    address_line1 = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, blank=True, default='Honduras')

    class Meta:
        db_table = 'profiles'
        constraints = [
            models.UniqueConstraint(
                fields=['resident_id'],
                condition=~models.Q(resident_id=''),
                name='unique_profile_resident_id'
            )
        ]

    def __str__(self):
        return f"{self.user.username} profile"

    def get_masked_resident_id(self):
        """거주자 번호 마스킹 (뒤 4자리만 표시)"""
        if not self.resident_id:
            return '-'
        if len(self.resident_id) <= 4:
            return '*' * len(self.resident_id)
        return '*' * (len(self.resident_id) - 4) + self.resident_id[-4:]

    def get_return_initial(self):
        """신고서 폼 초기값"""
        user = self.user
        return {
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
            'middle_initial': self.middle_initial,
            'resident_id': self.resident_id,
            'address_line1': self.address_line1,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'country': self.country,
        }
