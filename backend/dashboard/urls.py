# backend/dashboard/urls.py
from django.urls import path

from .views import (
    dashboard_view,
    dashboard_stats,
    posts_list_view,
    pages_list_view,
    edit_post_view,
    settings_view,
)

app_name = 'dashboard'

urlpatterns = [
    path('', dashboard_view, name='index'),
    path('posts/', posts_list_view, name='posts'),
    path('posts/<str:post_id>/', edit_post_view, name='post-edit'),
    path('pages/', pages_list_view, name='pages'),
    path('settings/', settings_view, name='settings'),
]

api_urlpatterns = [
    path('dashboard/stats/', dashboard_stats, name='dashboard-stats'),
]
