# backend/dashboard/samples.py
# Demo content shown on the dashboard when the real tables are empty.
from datetime import timedelta

from django.utils import timezone

SAMPLE_MEDIA_COUNT = 12

DEFAULT_SETTINGS = {
    "site_title": "My CMS",
    "site_description": "A powerful content management system",
    "site_logo": "https://tailwindui.com/img/logos/mark.svg?color=primary&shade=600",
    "site_favicon": "/favicon.svg",
    "footer_text": "© 2023 My CMS. All rights reserved.",
    "posts_per_page": 10,
    "disqus_shortname": "",
    "google_analytics_id": "",
}


def _days_ago(now, days):
    return (now - timedelta(days=days)).isoformat()


def sample_posts(now=None):
    now = now or timezone.now()
    return [
        {"id": 1, "title": "Getting Started with React", "slug": "getting-started-with-react",
         "status": "published", "created_at": _days_ago(now, 0)},
        {"id": 2, "title": "Advanced CSS Techniques", "slug": "advanced-css-techniques",
         "status": "published", "created_at": _days_ago(now, 1)},
        {"id": 3, "title": "JavaScript Best Practices", "slug": "javascript-best-practices",
         "status": "draft", "created_at": _days_ago(now, 2)},
    ]


def sample_pages(now=None):
    now = now or timezone.now()
    return [
        {"id": 1, "title": "About Us", "slug": "about-us",
         "status": "published", "created_at": _days_ago(now, 0)},
        {"id": 2, "title": "Contact", "slug": "contact",
         "status": "published", "created_at": _days_ago(now, 1)},
    ]
