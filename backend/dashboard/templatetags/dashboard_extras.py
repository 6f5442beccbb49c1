from django import template

from dashboard.utils import format_day

register = template.Library()


@register.filter
def day(value):
    """{{ post.created_at|day }} -> 'Mar 4, 2024'"""
    return format_day(value)


@register.filter
def status_label(value):
    return "Published" if value == "published" else "Draft"


@register.filter
def get_item(mapping, key):
    if not mapping:
        return None
    return mapping.get(key)
