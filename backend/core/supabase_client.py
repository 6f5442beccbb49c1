# backend/core/supabase_client.py
import logging
from typing import Optional

from django.conf import settings
from supabase import create_client

logger = logging.getLogger(__name__)


def get_supabase(access_token: Optional[str] = None):
    """
    Возвращает supabase client, созданный через SUPABASE_URL и SUPABASE_KEY.
    Если передан access_token пользователя, PostgREST-запросы выполняются от его имени
    (row level security видит пользователя).
    Бросает RuntimeError, если клиент создать не удалось.
    """
    url = getattr(settings, "SUPABASE_URL", None)
    key = getattr(settings, "SUPABASE_KEY", None)
    if not url or not key:
        raise RuntimeError("SUPABASE_URL or SUPABASE_KEY is not configured in environment.")
    try:
        client = create_client(url, key)
    except Exception as e:
        logger.exception("Failed to create supabase client")
        raise RuntimeError(f"Failed to create supabase client: {e}") from e

    if access_token:
        client.postgrest.auth(access_token)
    return client
