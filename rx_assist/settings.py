import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-dev-key-change-in-production')
DEBUG = os.getenv('DJANGO_DEBUG', '1') == '1'
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'prescriptions',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'prescriptions.middleware_metrics.MetricsMiddleware',
    'rx_assist.middleware.AppExceptionMiddleware',
]

ROOT_URLCONF = 'rx_assist.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'rx_assist.wsgi.application'

# Nothing is persisted: the prescription lives in the page session only
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

# LLM: USE_MOCK_LLM=1 answers with canned text, =0 calls LLM_PROVIDER for real
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'gemini')
USE_MOCK_LLM = os.getenv('USE_MOCK_LLM', '1') == '1'

GEMINI_API_KEY = os.getenv('GEMINI_API_KEY', '')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-1.5-flash')
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY', '')
CLAUDE_MODEL = os.getenv('CLAUDE_MODEL', 'claude-3-5-sonnet-20241022')

# Medication name pool served at /medications.csv
MEDICATIONS_CSV_PATH = Path(
    os.getenv('MEDICATIONS_CSV_PATH', BASE_DIR / 'prescriptions' / 'data' / 'medications.csv')
)

# Where the suggest_prescription command finds the running server
SUGGESTIONS_API_URL = os.getenv('SUGGESTIONS_API_URL', 'http://localhost:8000')

MED_NAME_AUTOCOMPLETE_LIMIT = int(os.getenv('MED_NAME_AUTOCOMPLETE_LIMIT', '10'))
CHIP_AUTOCOMPLETE_LIMIT = int(os.getenv('CHIP_AUTOCOMPLETE_LIMIT', '5'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)
