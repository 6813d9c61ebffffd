import os

from .base import *  # noqa

DEBUG = True
ALLOWED_HOSTS = ["*"]
CELERY_TASK_ALWAYS_EAGER = True
REST_FRAMEWORK["DEFAULT_PERMISSION_CLASSES"] = [  # type: ignore[index]
    "rest_framework.permissions.IsAuthenticatedOrReadOnly",
]
PAYOUT_GATEWAY_PROVIDER = os.getenv("PAYOUT_GATEWAY_PROVIDER", "mock").lower()
