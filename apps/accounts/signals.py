"""
User-Profile 자동 연동 시그널

    1. 회원가입 시 → User 생성 → Profile 자동 생성
    2. User 정보 수정 시 → Profile도 자동 저장
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth.models import User
from .models import Profile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """User 생성 시 Profile 자동 생성"""
    if created:
        Profile.objects.get_or_create(user=instance)


@receiver(post_save, sender=User)
def save_user_profile(sender, instance, created, **kwargs):
    """User 수정 시 Profile도 함께 저장"""
    if not created and hasattr(instance, 'profile'):
        instance.profile.save()
