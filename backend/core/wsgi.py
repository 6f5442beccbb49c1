"""
WSGI config for the dashboard project.

Puts backend/ on sys.path so `core` and `dashboard` import even when the
process is started from the repository root (e.g. `gunicorn core.wsgi`
with `--chdir backend` omitted).
"""

import os
import sys
from pathlib import Path

# backend/core/wsgi.py -> backend/
BACKEND_DIR = Path(__file__).resolve().parents[1]
backend_dir_str = str(BACKEND_DIR)
if backend_dir_str not in sys.path:
    sys.path.insert(0, backend_dir_str)

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

from django.core.wsgi import get_wsgi_application

application = get_wsgi_application()
