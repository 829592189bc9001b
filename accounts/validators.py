# accounts/validators.py
"""
Step gates for the signup wizard.

Each gate receives the wizard's ``FormData`` and raises
``StepValidationError`` carrying the notification title and description for
the first rule that is violated.  Gates never mutate the data.
"""
import re

from django.conf import settings

from core.exceptions import StepValidationError
from .roles import Role, Step, available_grade_names, parse_role

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def is_valid_email(email):
    return bool(EMAIL_PATTERN.match(email or ''))


def password_min_length():
    return getattr(settings, 'SIGNUP_PASSWORD_MIN_LENGTH', 6)


def validate_role_step(data):
    if parse_role(data.role) is None:
        raise StepValidationError("Select Role", "Please select your role.", step=Step.ROLE)


def validate_account_step(data):
    if not (data.first_name and data.last_name and data.email and data.password):
        raise StepValidationError(
            "Required Fields", "Please fill in all required fields.", step=Step.ACCOUNT
        )
    if not is_valid_email(data.email):
        raise StepValidationError("Invalid Email", "Please enter a valid email.", step=Step.ACCOUNT)
    min_length = password_min_length()
    if len(data.password) < min_length:
        raise StepValidationError(
            "Weak Password",
            f"Password must be at least {min_length} characters.",
            step=Step.ACCOUNT,
        )
    if data.password != data.confirm_password:
        raise StepValidationError(
            "Passwords Don't Match", "Please confirm your password.", step=Step.ACCOUNT
        )


def validate_details_step(data):
    # Grade is the only required detail, and only for learners
    if parse_role(data.role) != Role.LEARNER:
        return
    if data.grade not in available_grade_names():
        raise StepValidationError("Select Grade", "Please select your grade.", step=Step.DETAILS)


def validate_nothing(data):
    return None


STEP_GATES = {
    Step.ROLE: validate_role_step,
    Step.ACCOUNT: validate_account_step,
    Step.DETAILS: validate_details_step,
    Step.PAYMENT: validate_nothing,  # proof of payment is optional
    Step.COMPLETE: validate_nothing,
}


def run_step_gate(step, data):
    """Run the gate registered for ``step`` against ``data``"""
    STEP_GATES[step](data)
