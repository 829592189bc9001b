# accounts/roles.py
"""
Roles, step flows and the fixed lookup tables of the signup wizard.

Every table below is keyed by the same ``Role`` enumeration so that adding a
role without a label, dashboard route or step flow fails loudly at import
time instead of falling through a chain of conditionals.
"""
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import models


class Role(models.TextChoices):
    LEARNER = 'learner', 'Learner'
    TEACHER = 'teacher', 'Teacher'
    GRADE_HEAD = 'grade_head', 'Grade Head'
    PRINCIPAL = 'principal', 'Principal'
    ADMIN = 'admin', 'Administrator'


class Step(models.TextChoices):
    ROLE = 'role', 'Role'
    ACCOUNT = 'account', 'Account'
    DETAILS = 'details', 'Details'
    PAYMENT = 'payment', 'Payment'
    COMPLETE = 'complete', 'Complete'


ROLE_DESCRIPTIONS = {
    Role.LEARNER: "Student at the school",
    Role.TEACHER: "Educator staff member",
    Role.GRADE_HEAD: "Head of a grade",
    Role.PRINCIPAL: "School principal",
    Role.ADMIN: "System administrator",
}

DASHBOARD_ROUTES = {
    Role.LEARNER: '/dashboard/learner',
    Role.TEACHER: '/dashboard/teacher',
    Role.GRADE_HEAD: '/dashboard/grade-head',
    Role.PRINCIPAL: '/dashboard/principal',
    Role.ADMIN: '/dashboard/admin',
}

FALLBACK_ROUTE = '/portal'

STAFF_FLOW = (Step.ROLE, Step.ACCOUNT, Step.DETAILS, Step.COMPLETE)

STEP_FLOWS = {
    Role.LEARNER: (Step.ROLE, Step.ACCOUNT, Step.DETAILS, Step.PAYMENT, Step.COMPLETE),
    Role.TEACHER: STAFF_FLOW,
    Role.GRADE_HEAD: STAFF_FLOW,
    Role.PRINCIPAL: STAFF_FLOW,
    Role.ADMIN: STAFF_FLOW,
}

# Flow shown before a role has been picked
DEFAULT_FLOW = STAFF_FLOW

GRADES = [
    {'name': 'Grade 8', 'available': True},
    {'name': 'Grade 9', 'available': True},
    {'name': 'Grade 10', 'available': True},
    {'name': 'Grade 11', 'available': True},
    {'name': 'Grade 12', 'available': True},
]

GRADE_CHOICES = [(grade['name'], grade['name']) for grade in GRADES if grade['available']]

for _name, _table in (('ROLE_DESCRIPTIONS', ROLE_DESCRIPTIONS), ('DASHBOARD_ROUTES', DASHBOARD_ROUTES), ('STEP_FLOWS', STEP_FLOWS)):
    _missing = set(Role) - set(_table)
    if _missing:
        raise ImproperlyConfigured(f"{_name} is missing roles: {sorted(_missing)}")


def parse_role(value):
    """Return the ``Role`` for ``value`` or None when it is empty or unknown"""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def role_label(role):
    role = parse_role(role)
    return role.label if role else ''


def dashboard_route_for(role):
    """Map a role to its dashboard path; unknown roles land on the portal"""
    role = parse_role(role)
    if role is None:
        return FALLBACK_ROUTE
    return DASHBOARD_ROUTES[role]


def step_flow_for(role):
    role = parse_role(role)
    if role is None:
        return DEFAULT_FLOW
    return STEP_FLOWS[role]


def available_grade_names():
    return [grade['name'] for grade in GRADES if grade['available']]


def banking_details(id_number=''):
    """Banking reference rows shown on the payment step, in display order"""
    details = getattr(settings, 'BANKING_DETAILS', {})
    return [
        {'label': 'Bank', 'value': details.get('bank_name', '')},
        {'label': 'Account Name', 'value': details.get('account_name', '')},
        {'label': 'Account Number', 'value': details.get('account_number', '')},
        {'label': 'Branch Code', 'value': details.get('branch_code', '')},
        {'label': 'Reference', 'value': f"REG-{id_number or '[YOUR ID]'}"},
    ]
