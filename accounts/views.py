import logging
from dataclasses import asdict

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse_lazy
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.http import require_POST

from core.exceptions import StepValidationError, SubmissionInProgressError
from core.utils.logger import log_view_exception
from . import notifications
from .clipboard import feedback_seconds
from .forms import STEP_FORMS, CopyFieldForm, CustomAuthenticationForm
from .roles import Step, banking_details, dashboard_route_for
from .services import SignupBackendFactory
from .services.supabase import SESSION_KEY as SUPABASE_SESSION_KEY
from .submission import RegistrationSubmitter
from .wizard import SignupWizard, UploadedFiles

logger = logging.getLogger(__name__)

WIZARD_ACTIONS = ('next', 'back', 'submit')


def store_wizard(request, wizard):
    """Save the wizard; while it holds a password the session expires early"""
    wizard.save(request.session)
    if wizard.form_data.password or wizard.form_data.confirm_password:
        request.session.set_expiry(getattr(settings, 'SIGNUP_WIZARD_SESSION_AGE', 1800))


def discard_wizard(request):
    SignupWizard.discard(request.session)
    # Back to the normal session lifetime
    request.session.set_expiry(None)


class SignupWizardView(View):
    """Multi-step signup: role, account, details, payment (learners) and confirmation"""
    template_name = 'accounts/signup_wizard.html'

    def get(self, request):
        wizard = SignupWizard.load(request.session)
        form = self._form_for(wizard)
        return render(request, self.template_name, self._context(wizard, form))

    @method_decorator(log_view_exception('signup_wizard'))
    def post(self, request):
        wizard = SignupWizard.load(request.session)
        action = request.POST.get('action', 'next')
        if action not in WIZARD_ACTIONS:
            action = 'next'
        if action == 'submit' and wizard.loading:
            # Another request is creating this account; the stored session is left untouched
            return self._render_busy(request, wizard)

        form = self._form_for(wizard, data=request.POST, files=request.FILES)
        self._apply_form(request, wizard, form)

        if action == 'back':
            wizard.retreat()
        elif action == 'next':
            try:
                wizard.advance()
            except StepValidationError as e:
                notifications.notify_validation_error(request, e)
        elif action == 'submit':
            response = self._submit(request, wizard)
            if response is not None:
                return response

        store_wizard(request, wizard)
        return redirect('signup')

    def _submit(self, request, wizard):
        if not wizard.is_terminal:
            return None

        submitter = RegistrationSubmitter(
            request,
            wizard,
            SignupBackendFactory.get_auth_service(request),
            SignupBackendFactory.get_record_store(request),
        )
        try:
            result = submitter.submit()
        except SubmissionInProgressError:
            return self._render_busy(request, wizard)

        if result.success:
            discard_wizard(request)
            return redirect(result.redirect_url)
        return None

    def _render_busy(self, request, wizard):
        context = self._context(wizard, self._form_for(wizard))
        context['page_notice'] = notifications.format_toast(
            "Please Wait", "Your registration is already being submitted."
        )
        return render(request, self.template_name, context, status=409)

    def _form_for(self, wizard, data=None, files=None):
        form_class = STEP_FORMS[wizard.current_step]
        return form_class(
            data=data,
            files=files,
            initial=asdict(wizard.form_data),
            role=wizard.form_data.role,
        )

    def _apply_form(self, request, wizard, form):
        """Copy posted values onto the wizard; rejected uploads are reported"""
        form.is_valid()
        for name in form.file_fields:
            for error in form.errors.get(name, []):
                notifications.notify(
                    request, "Invalid File", f"{UploadedFiles.LABELS[name]}: {error}",
                    notifications.DESTRUCTIVE,
                )

        values = form.text_values()
        role = values.pop('role', None)
        if role:
            wizard.select_role(role)
        if values:
            wizard.update(**values)

        for key, uploaded in form.uploaded_documents().items():
            name = wizard.uploaded_files.attach(key, uploaded)
            notifications.notify(request, "File Selected", f"{name} ready to upload.")

    def _context(self, wizard, form):
        copied = wizard.copy_feedback.active_field()
        rows = banking_details(wizard.form_data.id_number)
        for row in rows:
            row['copied'] = row['label'] == copied
        return {
            'wizard': wizard,
            'form': form,
            'data': wizard.form_data,
            'step': wizard.step,
            'step_id': wizard.current_step.value,
            'total_steps': wizard.total_steps,
            'step_labels': wizard.step_labels,
            'progress': wizard.progress(),
            'is_first': wizard.is_first,
            'is_terminal': wizard.is_terminal,
            'loading': wizard.loading,
            'role_options': form.role_options() if wizard.current_step == Step.ROLE else [],
            'is_learner': wizard.form_data.is_learner,
            'banking_rows': rows,
            'uploaded_files': asdict(wizard.uploaded_files),
            'upload_labels': UploadedFiles.LABELS,
            'copy_feedback_ms': feedback_seconds() * 1000,
        }


@require_POST
def copy_banking_detail(request):
    """Record that a banking row was copied and hand its text to the page script"""
    wizard = SignupWizard.load(request.session)
    form = CopyFieldForm(request.POST, id_number=wizard.form_data.id_number)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    field = form.cleaned_data['field']
    wizard.copy_feedback.mark(field)
    store_wizard(request, wizard)
    notifications.notify(request, "Copied!", f"{field} copied to clipboard.")
    return JsonResponse({
        'field': field,
        'text': form.copied_text(),
        'expires_in': feedback_seconds(),
    })


def reset_signup(request):
    """Throw away the wizard and start again at the role step"""
    discard_wizard(request)
    return redirect('signup')


class SignInView(View):
    template_name = 'accounts/signin.html'
    form_class = CustomAuthenticationForm

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            return self._redirect_to_dashboard(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get(self, request):
        form = self.form_class()
        return render(request, self.template_name, {'form': form})

    def post(self, request):
        form = self.form_class(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user)

            name = user.get_full_name() or user.username
            messages.success(request, f'Welcome back, {user.get_role_display_name()} {name}!')
            return self._redirect_to_dashboard(user)

        messages.error(request, 'Invalid email or password. Please try again.')
        return render(request, self.template_name, {'form': form})

    def _redirect_to_dashboard(self, user):
        """Redirect user to the dashboard of their role"""
        return redirect(dashboard_route_for(user.dashboard_role))


class SignOutView(View):
    success_url = reverse_lazy('signup')

    def get(self, request):
        if request.user.is_authenticated or request.session.get(SUPABASE_SESSION_KEY):
            # Flushing the session also drops any hosted-backend session
            logout(request)
            messages.success(request, 'You have been logged out successfully')
        return redirect(self.success_url)
