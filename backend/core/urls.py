# backend/core/urls.py
from django.urls import path, include
from django.views.generic import RedirectView
from django.http import HttpResponse, HttpResponseNotFound

from dashboard.urls import api_urlpatterns


def custom_404_view(request, exception=None):
    return HttpResponseNotFound("Page not found")


urlpatterns = [
    path('dashboard/', include(('dashboard.urls', 'dashboard'), namespace='dashboard')),
    path('api/', include((api_urlpatterns, 'api'), namespace='api')),

    # Health + root
    path('health/', lambda request: HttpResponse("OK"), name='health-check'),
    path('', RedirectView.as_view(url='/dashboard/')),
]

handler404 = custom_404_view
