# backend/dashboard/views.py
import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

from .forms import PostEditForm, SettingsForm
from .guards import SubmitInProgress
from .pages import DashboardPage, EditPostPage, SettingsPage
from .tables import MEDIA, PAGES, POSTS, DataServiceError, get_data_service

logger = logging.getLogger(__name__)


def _service_or_unavailable(request):
    """Returns (data_service, None) or (None, 503 response) when Supabase is not configured."""
    try:
        return get_data_service(request), None
    except RuntimeError as e:
        logger.error("Data service unavailable: %s", e)
        response = render(request, "dashboard/unavailable.html", {"error": str(e)}, status=503)
        return None, response


def _form_errors(form):
    return {name: errs[0] for name, errs in form.errors.items()}


# ---------------------------
# Dashboard
# ---------------------------
@require_GET
def dashboard_view(request):
    data, unavailable = _service_or_unavailable(request)
    if unavailable:
        return unavailable
    page = DashboardPage(data)
    page.load()
    context = {
        "loading": page.loading,
        "counts": {name: page.display_count(name) for name in (POSTS, PAGES, MEDIA)},
        "recent_posts": page.display_recent_posts(),
        "recent_pages": page.display_recent_pages(),
        "posts_empty": page.posts_empty,
        "pages_empty": page.pages_empty,
    }
    return render(request, "dashboard/index.html", context)


@api_view(['GET'])
@permission_classes([AllowAny])
def dashboard_stats(request):
    """GET /api/dashboard/stats/: the same numbers the dashboard cards show."""
    try:
        data = get_data_service(request)
    except RuntimeError as e:
        logger.error("Data service unavailable: %s", e)
        return Response({'detail': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    page = DashboardPage(data)
    page.load()
    return Response(page.summary())


# ---------------------------
# Listings
# ---------------------------
def _listing(request, collection, title):
    data, unavailable = _service_or_unavailable(request)
    if unavailable:
        return unavailable
    rows, error = [], None
    try:
        rows = data.collection(collection).list_recent(settings.DASHBOARD_LIST_LIMIT)
    except DataServiceError as e:
        logger.exception("Error fetching %s", collection)
        error = e.message
    context = {"rows": rows, "error": error, "title": title, "collection": collection}
    return render(request, "dashboard/listing.html", context)


@require_GET
def posts_list_view(request):
    return _listing(request, POSTS, "Posts")


@require_GET
def pages_list_view(request):
    return _listing(request, PAGES, "Pages")


# ---------------------------
# Edit post
# ---------------------------
@require_http_methods(["GET", "POST"])
def edit_post_view(request, post_id):
    data, unavailable = _service_or_unavailable(request)
    if unavailable:
        return unavailable
    page = EditPostPage(data, post_id)
    page.load()
    if page.not_found:
        return render(request, "dashboard/post_not_found.html", {"post_id": post_id}, status=404)

    status_code = 200
    if request.method == "POST":
        form = PostEditForm(request.POST)
        valid = form.is_valid()
        form.apply_to(page)
        if not valid:
            page.form = page.form.with_errors(_form_errors(form))
            status_code = 400
        else:
            try:
                if page.submit():
                    return redirect("dashboard:posts")
            except SubmitInProgress as e:
                page.error = str(e)
                status_code = 409
            else:
                if page.form.errors:
                    status_code = 400

    context = {
        "page": page,
        "form": PostEditForm.from_page(page),
        "errors": page.form.errors,
    }
    return render(request, "dashboard/post_edit.html", context, status=status_code)


# ---------------------------
# Settings
# ---------------------------
@require_http_methods(["GET", "POST"])
def settings_view(request):
    data, unavailable = _service_or_unavailable(request)
    if unavailable:
        return unavailable
    page = SettingsPage(data)
    page.load()

    status_code = 200
    if request.method == "POST":
        if request.POST.get("action") == "reset":
            page.reset()
        else:
            form = SettingsForm(request.POST)
            valid = form.is_valid()
            form.apply_to(page)
            if not valid:
                page.form = page.form.with_errors(_form_errors(form))
                status_code = 400
            else:
                try:
                    if page.submit():
                        messages.success(request, page.success)
                        return redirect("dashboard:settings")
                except SubmitInProgress as e:
                    page.error = str(e)
                    status_code = 409
                else:
                    if page.form.errors:
                        status_code = 400

    context = {
        "page": page,
        "form": SettingsForm.from_page(page),
        "errors": page.form.errors,
    }
    return render(request, "dashboard/settings.html", context, status=status_code)
