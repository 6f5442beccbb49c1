# backend/dashboard/widgets.py
from django import forms
from django.utils.html import format_html
from django.utils.safestring import mark_safe

"""
Rich text widget.
Выводит обычный <textarea> (чтобы форма работала без JS) и контейнер,
который static/dashboard/js/editor.js превращает в CKEditor 5.
"""

EDITOR_TOOLBAR = "heading|bold|italic|underline|strikethrough|bulletedList|numberedList|outdent|indent|alignment|link|imageInsert|removeFormat"


class RichTextWidget(forms.Textarea):
    def __init__(self, attrs=None, toolbar=EDITOR_TOOLBAR):
        base_attrs = {"class": "rich-text-textarea", "rows": 24}
        if attrs:
            base_attrs.update(attrs)
        super().__init__(attrs=base_attrs)
        self.toolbar = toolbar

    def render(self, name, value, attrs=None, renderer=None):
        textarea_html = super().render(name, value, attrs=attrs, renderer=renderer)
        widget_id = (attrs or {}).get("id") or f"id_{name}"
        container = format_html(
            '<div id="{}_editor" class="rich-text-editor" data-textarea="{}" data-toolbar="{}"></div>',
            widget_id, widget_id, self.toolbar,
        )
        return mark_safe(textarea_html + container)
