from .base import *  # noqa: F403

# Keep tests self-contained without external services.
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_TASK_STORE_EAGER_RESULT = False
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


PAYOUT_GATEWAY_PROVIDER = "razorpayx"
PAYOUT_BULK_INTERVAL_SECONDS = 0.0
RAZORPAYX_KEY_ID = "rzp_test_key"
RAZORPAYX_KEY_SECRET = "rzp_test_secret"
RAZORPAYX_ACCOUNT_NUMBER = "7878780080316316"
