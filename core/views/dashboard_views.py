import logging

from django.contrib.auth.mixins import AccessMixin
from django.shortcuts import redirect
from django.views.generic import TemplateView

from accounts.models import Registration
from accounts.roles import Role, dashboard_route_for, role_label
from accounts.services.supabase import stored_session

logger = logging.getLogger(__name__)


def signed_in_role(request):
    """Dashboard role of whoever is signed in, locally or through the hosted
    auth service; None when nobody is signed in"""
    user = request.user
    if user.is_authenticated:
        return user.dashboard_role
    session = stored_session(request)
    if session is not None:
        return session.role
    return None


class SignedInRequiredMixin(AccessMixin):
    """Like LoginRequiredMixin, but a hosted-backend session also counts"""

    def dispatch(self, request, *args, **kwargs):
        if signed_in_role(request) is None:
            return self.handle_no_permission()
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        user = self.request.user
        if user.is_authenticated:
            context['welcome_name'] = user.get_full_name() or user.username
            context['registration'] = Registration.objects.filter(user=user).first()
        else:
            # Hosted accounts keep their registration row in the hosted database
            context['welcome_name'] = stored_session(self.request).email
            context['registration'] = None
        return context


class RoleDashboardView(SignedInRequiredMixin, TemplateView):
    """Landing page for one role, reached right after registration or sign in"""
    template_name = 'core/dashboard.html'
    role = None

    def dispatch(self, request, *args, **kwargs):
        role = signed_in_role(request)
        if role is not None and not request.user.is_superuser and role != self.role:
            # Send people to their own dashboard rather than someone else's
            logger.info(f"Signed-in {role or 'no role'} account redirected away from {self.role} dashboard")
            return redirect(dashboard_route_for(role))
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            'dashboard_role': self.role,
            'dashboard_title': f"{role_label(self.role)} Dashboard",
            'show_grade': self.role == Role.LEARNER,
        })
        return context


class PortalView(SignedInRequiredMixin, TemplateView):
    """Fallback landing page for accounts without a recognised role"""
    template_name = 'core/portal.html'


def home(request):
    role = signed_in_role(request)
    if role is not None:
        return redirect(dashboard_route_for(role))
    return redirect('signup')
