from .dashboard_views import RoleDashboardView, PortalView, home

__all__ = [
    'RoleDashboardView',
    'PortalView',
    'home',
]
