from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class DashboardConfig(AppConfig):
    name = "dashboard"
    label = "dashboard"
    verbose_name = "CMS dashboard"

    def ready(self):
        from django.conf import settings
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            logger.warning("SUPABASE_URL / SUPABASE_KEY not set; dashboard pages will answer 503")
