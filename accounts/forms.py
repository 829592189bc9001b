from crispy_forms.helper import FormHelper
from crispy_forms.layout import Column, Field, HTML, Layout, Row
from django import forms
from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.forms import AuthenticationForm
from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator

from .roles import GRADE_CHOICES, ROLE_DESCRIPTIONS, Role, Step, banking_details

User = get_user_model()


def upload_extensions():
    return getattr(settings, 'SIGNUP_ALLOWED_UPLOAD_EXTENSIONS', ['pdf', 'jpg', 'jpeg', 'png'])


def document_field(label):
    extensions = upload_extensions()
    return forms.FileField(
        label=label,
        required=False,
        validators=[FileExtensionValidator(allowed_extensions=extensions)],
        widget=forms.ClearableFileInput(attrs={
            'class': 'form-control',
            'accept': ','.join(f'.{ext}' for ext in extensions),
        }),
        help_text="PDF, JPG or PNG",
    )


class WizardStepForm(forms.Form):
    """Base for the per-step forms.

    Step forms only bind and tidy the posted values; the step gates in
    ``accounts.validators`` decide whether the wizard may move on, so text
    fields carry no required/format validation of their own.
    """
    file_fields = ()

    def __init__(self, *args, role='', **kwargs):
        self.role = role
        super().__init__(*args, **kwargs)
        self.helper = FormHelper()
        self.helper.form_tag = False
        self.helper.disable_csrf = True

    def text_values(self):
        """Cleaned text values to copy onto the wizard's form data"""
        return {
            name: (value or '').strip() if name not in ('password', 'confirm_password') else (value or '')
            for name, value in self.cleaned_data.items()
            if name not in self.file_fields and name in self.fields
        }

    def uploaded_documents(self):
        return {
            name: self.cleaned_data.get(name)
            for name in self.file_fields
            if self.cleaned_data.get(name)
        }


class RoleForm(WizardStepForm):
    role = forms.ChoiceField(
        choices=Role.choices,
        required=False,
        widget=forms.RadioSelect(attrs={'class': 'form-check-input'}),
    )

    def role_options(self):
        return [
            {'value': role.value, 'label': role.label, 'description': ROLE_DESCRIPTIONS[role]}
            for role in Role
        ]


class AccountForm(WizardStepForm):
    first_name = forms.CharField(
        label='First Name *', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Enter first name'}),
    )
    last_name = forms.CharField(
        label='Last Name *', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Enter last name'}),
    )
    email = forms.CharField(
        label='Email Address *', required=False,
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'your@email.com'}),
    )
    phone = forms.CharField(
        label='Phone Number', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '0XX XXX XXXX'}),
    )
    password = forms.CharField(
        label='Password *', required=False, strip=False,
        widget=forms.PasswordInput(render_value=True, attrs={
            'class': 'form-control', 'autocomplete': 'new-password', 'data-toggle-password': 'true',
        }),
    )
    confirm_password = forms.CharField(
        label='Confirm Password *', required=False, strip=False,
        widget=forms.PasswordInput(render_value=True, attrs={
            'class': 'form-control', 'autocomplete': 'new-password',
        }),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.helper.layout = Layout(
            Row(Column('first_name', css_class='col-sm-6'), Column('last_name', css_class='col-sm-6')),
            'email',
            'phone',
            Row(Column('password', css_class='col-sm-6'), Column('confirm_password', css_class='col-sm-6')),
        )


class DetailsForm(WizardStepForm):
    id_number = forms.CharField(
        label='SA ID Number', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '13-digit ID number'}),
    )
    address = forms.CharField(
        label='Home Address', required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'Full residential address'}),
    )
    grade = forms.ChoiceField(
        label='Grade *', required=False,
        choices=[('', 'Select a grade')] + GRADE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    parent_name = forms.CharField(
        label='Parent Name', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Parent/Guardian full name'}),
    )
    parent_phone = forms.CharField(
        label='Parent Phone', required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '0XX XXX XXXX'}),
    )
    parent_email = forms.CharField(
        label='Parent Email', required=False,
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'parent@email.com'}),
    )
    id_document = document_field('ID Document')
    proof_of_address = document_field('Proof of Address')

    file_fields = ('id_document', 'proof_of_address')
    learner_fields = ('grade', 'parent_name', 'parent_phone', 'parent_email')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        is_learner = self.role == Role.LEARNER
        if not is_learner:
            # Grade and guardian details only exist for learners
            for name in self.learner_fields:
                del self.fields[name]

        layout = ['id_number', 'address']
        if is_learner:
            layout += [
                Field('grade'),
                HTML('<h5 class="mt-4">Parent / Guardian</h5>'),
                'parent_name',
                Row(Column('parent_phone', css_class='col-sm-6'), Column('parent_email', css_class='col-sm-6')),
            ]
        layout += [
            HTML('<h5 class="mt-4">Documents (optional)</h5>'),
            Row(Column('id_document', css_class='col-sm-6'), Column('proof_of_address', css_class='col-sm-6')),
        ]
        self.helper.layout = Layout(*layout)


class PaymentForm(WizardStepForm):
    proof_of_payment = document_field('Proof of Payment')

    file_fields = ('proof_of_payment',)


class CompleteForm(WizardStepForm):
    pass


STEP_FORMS = {
    Step.ROLE: RoleForm,
    Step.ACCOUNT: AccountForm,
    Step.DETAILS: DetailsForm,
    Step.PAYMENT: PaymentForm,
    Step.COMPLETE: CompleteForm,
}


class CopyFieldForm(forms.Form):
    """Which banking reference row the visitor copied"""
    field = forms.CharField(max_length=50)

    def __init__(self, *args, id_number='', **kwargs):
        super().__init__(*args, **kwargs)
        self.rows = {row['label']: row['value'] for row in banking_details(id_number)}

    def clean_field(self):
        field = self.cleaned_data['field']
        if field not in self.rows:
            raise ValidationError("Unknown banking detail.")
        return field

    def copied_text(self):
        return self.rows[self.cleaned_data['field']]


class CustomAuthenticationForm(AuthenticationForm):
    username = forms.CharField(
        label='Email or Username',
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True})
    )
    password = forms.CharField(
        label='Password',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'autocomplete': 'current-password'})
    )

    def clean(self):
        username = self.cleaned_data.get('username')
        password = self.cleaned_data.get('password')

        if username and password:
            # Accounts created by the wizard use the email as username
            if '@' in username:
                user = User.objects.filter(email__iexact=username).first()
                if user is not None:
                    username = user.username

            self.user_cache = authenticate(
                self.request,
                username=username,
                password=password
            )

            if self.user_cache is None:
                raise ValidationError(
                    self.error_messages['invalid_login'],
                    code='invalid_login',
                    params={'username': self.username_field.verbose_name},
                )

            self.confirm_login_allowed(self.user_cache)

        return self.cleaned_data
