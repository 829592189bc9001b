# ogwini_portal/urls.py
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('django-admin/', admin.site.urls),

    # Redirect the usual login URLs to the signin view
    path('login/', RedirectView.as_view(pattern_name='signin', permanent=True)),
    path('accounts/login/', RedirectView.as_view(pattern_name='signin', permanent=True)),

    path('accounts/', include('accounts.urls')),

    # Dashboards, portal and home
    path('', include('core.urls')),
]
