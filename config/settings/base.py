"""
Django settings for the tax filing portal.
"""

from pathlib import Path
from dotenv import load_dotenv
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent  # settings 폴더 안이므로 parent 하나 더

# .env 파일 로드 (없으면 무시)
load_dotenv(BASE_DIR / '.env')


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = (
    os.environ.get("DJANGO_SECRET_KEY")
    or os.environ.get("SECRET_KEY")
    or "ci-dev-secret-key"
    )
DEBUG = os.environ.get("DEBUG", "0") == "1"


ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    #내 앱들
    'apps.core',
    'apps.accounts.apps.AccountsConfig',
    'apps.tax.apps.TaxConfig',
    'apps.dashboard.apps.DashboardConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],  # 공용 templates 폴더
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'django.template.context_processors.static',  # static 파일용
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}


# Password validation

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'America/Tegucigalpa'  # Próspera (Roatán) 현지 시간

USE_I18N = True

USE_TZ = True


# Authentication
LOGIN_URL = '/accounts/login/'
LOGIN_REDIRECT_URL = '/'
LOGOUT_REDIRECT_URL = '/accounts/login/'


# Static files (CSS, JavaScript, Images)

STATIC_URL = '/static/'
STATICFILES_DIRS = [
    BASE_DIR / 'static',  # 공용 static 폴더
]
STATIC_ROOT = BASE_DIR / 'staticfiles'  # collectstatic 할 때 모일 곳


# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# 세금 신고 설정
TAX_FIRST_YEAR = int(os.environ.get("TAX_FIRST_YEAR", "2020"))  # 신고 가능한 첫 과세연도
TAX_CURRENCY = os.environ.get("TAX_CURRENCY", "USD")

# 제출 후 상세 화면에 표시하는 납부 안내 (수표 / 송금)
TAX_PAYMENT_INFO = {
    'check_payable_to': os.environ.get("TAX_CHECK_PAYABLE_TO", "Próspera ZEDE"),
    'check_mailing_address': {
        'line1': os.environ.get("TAX_CHECK_ADDRESS_LINE1", "Attn: Tax Office"),
        'line2': os.environ.get("TAX_CHECK_ADDRESS_LINE2", ""),
        'city': os.environ.get("TAX_CHECK_ADDRESS_CITY", "Roatan"),
        'state': os.environ.get("TAX_CHECK_ADDRESS_STATE", "Islas de la Bahia"),
        'postal_code': os.environ.get("TAX_CHECK_ADDRESS_POSTAL_CODE", ""),
    },
    'wire_transfer': {
        'bank_name': os.environ.get("TAX_WIRE_BANK_NAME", ""),
        'beneficiary': os.environ.get("TAX_WIRE_BENEFICIARY", ""),
        'address': os.environ.get("TAX_WIRE_BANK_ADDRESS", ""),
        'account_number': os.environ.get("TAX_WIRE_ACCOUNT_NUMBER", ""),
        'routing_number': os.environ.get("TAX_WIRE_ROUTING_NUMBER", ""),
    },
}


# 로깅 (기본: 앱 로거만 INFO로 콘솔 출력)
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': os.environ.get("APP_LOG_LEVEL", "INFO"),
        },
    },
}
