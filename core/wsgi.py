from __future__ import annotations

import os
from pathlib import Path

from django.core.wsgi import get_wsgi_application
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", os.getenv("PAYOUTS_SETTINGS_MODULE", "core.settings.dev"))

application = get_wsgi_application()
