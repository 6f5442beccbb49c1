# backend/dashboard/forms.py
from django import forms

from .pages import POST_STATUSES, SETTINGS_FIELDS
from .widgets import RichTextWidget

# Fields are optional at the Django level: the page rules produce the
# user-facing messages, these forms only parse and render the inputs.


class PostEditForm(forms.Form):
    title = forms.CharField(required=False)
    slug = forms.CharField(required=False)
    auto_slug = forms.BooleanField(required=False, label="Generate from title")
    excerpt = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 3}))
    content = forms.CharField(required=False, strip=False, widget=RichTextWidget())
    featured_image = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={"placeholder": "https://example.com/image.jpg"}),
    )
    status = forms.ChoiceField(
        required=False,
        choices=[(s, s.capitalize()) for s in POST_STATUSES],
    )
    meta_title = forms.CharField(required=False)
    meta_description = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 3}))

    @classmethod
    def from_page(cls, page):
        initial = dict(page.form.values)
        initial.update(content=page.content, slug=page.slug.value, auto_slug=page.auto_slug)
        return cls(initial=initial)

    def apply_to(self, page):
        """Feed cleaned input through the page reducers; slug last so its mode wins."""
        data = self.cleaned_data
        for name in ("excerpt", "featured_image", "meta_title", "meta_description"):
            page.change_field(name, data.get(name) or "")
        # a missing or unknown status keeps the stored one
        if data.get("status"):
            page.change_field("status", data["status"])
        page.change_content(data.get("content") or "")

        if data.get("auto_slug"):
            page.toggle_auto_slug(True)
            page.change_title(data.get("title") or "")
        else:
            page.toggle_auto_slug(False)
            page.change_title(data.get("title") or "")
            if data.get("slug", "") != page.slug.value:
                page.change_slug(data.get("slug") or "")


class SettingsForm(forms.Form):
    site_title = forms.CharField(required=False)
    site_description = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 3}))
    site_logo = forms.CharField(required=False, label="Logo URL")
    site_favicon = forms.CharField(required=False, label="Favicon URL")
    footer_text = forms.CharField(required=False)
    posts_per_page = forms.CharField(
        required=False,
        widget=forms.NumberInput(attrs={"min": 1, "max": 50}),
    )
    disqus_shortname = forms.CharField(required=False, label="Disqus shortname")
    google_analytics_id = forms.CharField(required=False, label="Google Analytics ID")

    @classmethod
    def from_page(cls, page):
        return cls(initial=dict(page.form.values))

    def apply_to(self, page):
        for name in SETTINGS_FIELDS:
            page.change_field(name, self.cleaned_data.get(name))
