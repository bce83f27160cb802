# Django 기본
from django.shortcuts import render, redirect
from django.urls import reverse_lazy
from django.contrib import messages
from django.contrib.auth import login as auth_login
from django.contrib.auth.decorators import login_required

# Django 인증 관련
from django.contrib.auth.views import (
    LoginView as DjangoLoginView,
    LogoutView as DjangoLogoutView,
)

# 데이터베이스
from django.db import IntegrityError, transaction

import logging

# 앱 내부
from .forms import ProfileForm, CustomUserCreationForm
from .models import Profile

logger = logging.getLogger(__name__)


class UserLoginView(DjangoLoginView):
    """사용자 로그인"""
    template_name = "accounts/login.html"
    redirect_authenticated_user = True
    next_page = reverse_lazy("dashboard:index")


class UserLogoutView(DjangoLogoutView):
    """사용자 로그아웃"""
    next_page = reverse_lazy("accounts:login")


def signup(request):
    """
    회원가입
    - 가입 즉시 로그인 처리
    - Profile 자동 생성 (signals.py에서 처리)
    """
    if request.user.is_authenticated:
        return redirect('dashboard:index')

    if request.method == "POST":
        form = CustomUserCreationForm(request.POST)
        if form.is_valid():
            try:
                user = form.save()
                auth_login(request, user)
                logger.info(f"신규 회원가입: {user.username} (ID: {user.id})")
                messages.success(request, f"Welcome, {user.username}! Complete your profile before filing.")
                return redirect("accounts:profile_edit")
            except IntegrityError as e:
                logger.error(f"회원가입 실패 (중복 데이터): {e}")
                messages.error(request, "This account already exists.")
        else:
            messages.error(request, "Please check the highlighted fields.")
    else:
        form = CustomUserCreationForm()

    return render(request, "accounts/signup.html", {"form": form})


@login_required
def profile_edit(request):
    """
    프로필 수정
    - 신고서 작성 시 납세자 정보 초기값으로 사용
    """
    profile, created = Profile.objects.get_or_create(user=request.user)

    if created:
        logger.info(f"프로필 자동 생성: user_id={request.user.id}")

    if request.method == "POST":
        form = ProfileForm(request.POST, instance=profile)
        if form.is_valid():
            try:
                with transaction.atomic():
                    form.save()
                logger.info(f"프로필 수정: user_id={request.user.id}")
                messages.success(request, "Profile saved.")
                return redirect('dashboard:index')

            except IntegrityError as e:
                logger.error(f"프로필 저장 실패 (무결성 제약): user_id={request.user.id}, error={e}")
                messages.error(request, "This resident ID is already registered.")
        else:
            messages.error(request, "Please check the highlighted fields.")
    else:
        form = ProfileForm(instance=profile)

    return render(request, "accounts/profile_edit.html", {"form": form})
