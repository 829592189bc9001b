# core/urls.py
from django.urls import path

from accounts.roles import Role
from .views import PortalView, RoleDashboardView, home

# Paths are literal to match the routes the signup wizard redirects to
urlpatterns = [
    path('', home, name='home'),
    path('dashboard/learner', RoleDashboardView.as_view(role=Role.LEARNER), name='learner_dashboard'),
    path('dashboard/teacher', RoleDashboardView.as_view(role=Role.TEACHER), name='teacher_dashboard'),
    path('dashboard/grade-head', RoleDashboardView.as_view(role=Role.GRADE_HEAD), name='grade_head_dashboard'),
    path('dashboard/principal', RoleDashboardView.as_view(role=Role.PRINCIPAL), name='principal_dashboard'),
    path('dashboard/admin', RoleDashboardView.as_view(role=Role.ADMIN), name='admin_dashboard'),
    path('portal', PortalView.as_view(), name='portal'),
]
