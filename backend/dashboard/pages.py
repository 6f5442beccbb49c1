# backend/dashboard/pages.py
"""
Page components of the admin dashboard.

Each page owns its own lifecycle: ``load()`` fetches what the page shows,
the ``change_*`` methods apply user input, and ``submit()`` persists it.
Pages never raise on data-service failures; they log and expose ``error``.
"""
import logging
from typing import Any, Dict, List, Optional

from django.conf import settings

from .guards import SubmitInProgress, save_guard
from .samples import DEFAULT_SETTINGS, SAMPLE_MEDIA_COUNT, sample_pages, sample_posts
from .state import (
    FormState, Rule, SlugState, at_least, at_most, is_whole_number, required, validate,
)
from .tables import MEDIA, PAGES, POSTS, SETTINGS, DataServiceError, RowNotFoundError

logger = logging.getLogger(__name__)

LOADING_PLACEHOLDER = "..."


def _recent_limit():
    return getattr(settings, "DASHBOARD_RECENT_LIMIT", 5)


# ---------------------------
# Dashboard
# ---------------------------
class DashboardPage:
    def __init__(self, data, recent_limit: Optional[int] = None,
                 sample_posts_list: Optional[List[Dict]] = None,
                 sample_pages_list: Optional[List[Dict]] = None,
                 sample_media_count: int = SAMPLE_MEDIA_COUNT):
        self.data = data
        self.recent_limit = recent_limit or _recent_limit()
        self.sample_posts = sample_posts() if sample_posts_list is None else sample_posts_list
        self.sample_pages = sample_pages() if sample_pages_list is None else sample_pages_list
        self.sample_media_count = sample_media_count

        self.loading = True
        self.stats = {POSTS: 0, PAGES: 0, MEDIA: 0}
        self.recent_posts: List[Dict[str, Any]] = []
        self.recent_pages: List[Dict[str, Any]] = []

    def load(self):
        """
        Five reads, one after another. Results are committed only when all of
        them succeed; the first failure stops the rest.
        """
        self.loading = True
        try:
            posts_count = self.data.posts.count()
            pages_count = self.data.pages.count()
            media_count = self.data.media.count()
            posts = self.data.posts.list_recent(self.recent_limit)
            pages = self.data.pages.list_recent(self.recent_limit)

            self.stats = {
                POSTS: posts_count or 0,
                PAGES: pages_count or 0,
                MEDIA: media_count or 0,
            }
            self.recent_posts = posts or []
            self.recent_pages = pages or []
        except DataServiceError:
            logger.exception("Error fetching dashboard data")
        finally:
            self.loading = False

    def _fallback_count(self, name):
        if name == POSTS:
            return len(self.sample_posts)
        if name == PAGES:
            return len(self.sample_pages)
        return self.sample_media_count

    def display_count(self, name):
        if self.loading:
            return LOADING_PLACEHOLDER
        return self.stats.get(name) or self._fallback_count(name)

    def display_recent_posts(self):
        if self.loading:
            return []
        return self.recent_posts if self.recent_posts else self.sample_posts

    def display_recent_pages(self):
        if self.loading:
            return []
        return self.recent_pages if self.recent_pages else self.sample_pages

    @property
    def posts_empty(self) -> bool:
        return not self.loading and not self.recent_posts and not self.sample_posts

    @property
    def pages_empty(self) -> bool:
        return not self.loading and not self.recent_pages and not self.sample_pages

    def summary(self) -> Dict[str, Any]:
        return {
            "loading": self.loading,
            "counts": {name: self.display_count(name) for name in (POSTS, PAGES, MEDIA)},
            "recent_posts": self.display_recent_posts(),
            "recent_pages": self.display_recent_pages(),
        }


# ---------------------------
# Edit post
# ---------------------------
POST_FIELDS = ("title", "excerpt", "status", "featured_image", "meta_title", "meta_description")
POST_STATUSES = ("draft", "published")

POST_RULES = [
    Rule("title", required, "Title is required"),
]


class EditPostPage:
    def __init__(self, data, post_id, guard=save_guard):
        self.data = data
        self.post_id = post_id
        self.guard = guard

        self.post: Optional[Dict[str, Any]] = None
        self.form = FormState.seeded(POST_FIELDS)
        # rich text body comes from the editor widget, not from the form fields
        self.content = ""
        self.slug = SlugState()

        self.loading = True
        self.saving = False
        self.error: Optional[str] = None

    def load(self):
        if not self.post_id:
            self.loading = False
            return
        self.loading = True
        try:
            row = self.data.posts.get(self.post_id)
        except DataServiceError as e:
            # missing row and failed query end up in the same "not found" state
            logger.exception("Error fetching post %s", self.post_id)
            self.error = e.message
        else:
            self.post = row
            self.content = row.get("content") or ""
            self.slug = SlugState(value=row.get("slug") or "")
            self.form = FormState.seeded(POST_FIELDS, row)
        finally:
            self.loading = False

    @property
    def not_found(self) -> bool:
        return not self.loading and self.post is None

    @property
    def auto_slug(self) -> bool:
        return self.slug.auto

    def change_field(self, name: str, value):
        if name == "title":
            self.change_title(value)
            return
        self.form = self.form.set_field(name, value)

    def change_title(self, title: str):
        self.form = self.form.set_field("title", title)
        self.slug = self.slug.on_title_change(title)

    def change_slug(self, text: str):
        self.slug = self.slug.on_slug_edit(text)

    def toggle_auto_slug(self, enabled: bool):
        self.slug = self.slug.toggle(enabled, self.form.get("title") or "")

    def change_content(self, html: str):
        self.content = html or ""

    def payload(self) -> Dict[str, Any]:
        data = dict(self.form.values)
        data["content"] = self.content
        data["slug"] = self.slug.value
        return data

    def submit(self) -> bool:
        """True when the update went through and the editor should leave for the listing."""
        if self.saving:
            raise SubmitInProgress("A save is already in progress")
        if self.post is None:
            return False

        errors = validate(POST_RULES, self.form.values)
        if errors:
            self.form = self.form.with_errors(errors)
            return False

        with self.guard.hold((POSTS, str(self.post_id))):
            self.saving = True
            self.error = None
            try:
                self.data.posts.update(self.post_id, self.payload())
            except DataServiceError as e:
                logger.exception("Error updating post %s", self.post_id)
                self.error = e.message
                return False
            finally:
                self.saving = False
        logger.info("Post %s updated", self.post_id)
        return True


# ---------------------------
# Settings
# ---------------------------
SETTINGS_FIELDS = tuple(DEFAULT_SETTINGS)
SETTINGS_SAVED_MESSAGE = "Settings saved successfully!"
SETTINGS_GUARD_KEY = (SETTINGS, "singleton")

SETTINGS_RULES = [
    Rule("site_title", required, "Site title is required"),
    Rule("posts_per_page", required, "Posts per page is required"),
    Rule("posts_per_page", is_whole_number, "Posts per page must be a number"),
    Rule("posts_per_page", at_least(1), "Minimum value is 1"),
    Rule("posts_per_page", at_most(50), "Maximum value is 50"),
]


def _to_int(value):
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return value
    return int(number) if number.is_integer() else number


class SettingsPage:
    def __init__(self, data, guard=save_guard):
        self.data = data
        self.guard = guard

        self.settings: Optional[Dict[str, Any]] = None
        self.form = FormState.seeded(SETTINGS_FIELDS, None, DEFAULT_SETTINGS)

        self.loading = False
        self.saving = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    def load(self):
        self.loading = True
        try:
            self.settings = self.data.settings.get_single()
        except RowNotFoundError:
            logger.info("No settings row yet; using defaults")
        except DataServiceError as e:
            logger.exception("Error fetching settings")
            self.error = e.message
        finally:
            self.loading = False
        self.form = FormState.seeded(SETTINGS_FIELDS, self.settings, DEFAULT_SETTINGS)

    @property
    def exists(self) -> bool:
        return bool(self.settings)

    def change_field(self, name: str, value):
        self.form = self.form.set_field(name, value)

    def reset(self):
        if not self.settings:
            return
        self.form = FormState(values={name: self.settings.get(name) for name in SETTINGS_FIELDS})

    def payload(self) -> Dict[str, Any]:
        data = dict(self.form.values)
        data["posts_per_page"] = _to_int(data.get("posts_per_page"))
        return data

    def submit(self) -> bool:
        if self.saving:
            raise SubmitInProgress("A save is already in progress")

        errors = validate(SETTINGS_RULES, self.form.values)
        if errors:
            self.form = self.form.with_errors(errors)
            return False

        with self.guard.hold(SETTINGS_GUARD_KEY):
            self.saving = True
            self.error = None
            self.success = None
            try:
                if self.settings:
                    self.data.settings.update(self.settings["id"], self.payload())
                else:
                    rows = self.data.settings.insert(self.payload())
                    # the inserted row becomes the loaded one, so the next save updates it
                    if rows:
                        self.settings = rows[0]
            except DataServiceError as e:
                logger.exception("Error saving settings")
                self.error = e.message
                return False
            finally:
                self.saving = False
        self.success = SETTINGS_SAVED_MESSAGE
        return True
