# backend/core/middleware.py
import logging

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class SupabaseSessionMiddleware(MiddlewareMixin):
    """
    Attach the caller's Supabase access token to the request as
    ``request.supabase_token``.

    The token is taken from ``Authorization: Bearer <token>`` first, then from
    the session key named by ``SUPABASE_SESSION_KEY``. Nothing is verified
    here: the token is only forwarded to PostgREST.
    """

    def process_request(self, request):
        token = None
        auth = request.META.get("HTTP_AUTHORIZATION", "")
        parts = auth.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]
        elif hasattr(request, "session"):
            token = request.session.get(settings.SUPABASE_SESSION_KEY)
        request.supabase_token = token or None
        return None
