# backend/dashboard/utils.py
import re
from datetime import datetime
from typing import Optional

from django.utils.dateparse import parse_datetime
from django.utils.text import slugify as dj_slugify

CYRILLIC_TO_LATIN = {
    'а':'a','б':'b','в':'v','г':'g','д':'d','е':'e','ё':'yo','ж':'zh','з':'z','и':'i',
    'й':'y','к':'k','л':'l','м':'m','н':'n','о':'o','п':'p','р':'r','с':'s','т':'t',
    'у':'u','ф':'f','х':'kh','ц':'ts','ч':'ch','ш':'sh','щ':'shch','ъ':'','ы':'y','ь':'',
    'э':'e','ю':'yu','я':'ya'
}


def translit_to_latin(text: str) -> str:
    result = []
    for ch in text:
        low = ch.lower()
        if low in CYRILLIC_TO_LATIN:
            mapped = CYRILLIC_TO_LATIN[low]
            if ch.isupper():
                mapped = mapped.capitalize()
            result.append(mapped)
        else:
            result.append(ch)
    return ''.join(result)


def slug_from_title(value: str) -> str:
    """
    "Hello, World!" -> "hello-world".
    Lowercase, URL-safe tokens only; every non-alphanumeric run becomes one '-'.
    """
    if not value:
        return ''
    slug = dj_slugify(translit_to_latin(value))
    # django keeps underscores, we don't
    slug = re.sub(r'[^a-z0-9]+', '-', slug)
    return slug.strip('-')[:200]


def as_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return parse_datetime(str(value))
    except ValueError:
        return None


def format_day(value) -> str:
    """Timestamp -> 'Mar 4, 2024'. Unparseable values render as-is."""
    dt = as_datetime(value)
    if dt is None:
        return str(value or '')
    return f"{dt:%b} {dt.day}, {dt.year}"
