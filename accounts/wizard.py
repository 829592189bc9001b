# accounts/wizard.py
"""
Signup wizard state machine.

One ``SignupWizard`` exists per browser session.  It owns the collected
``FormData``, the names of any selected documents, the 1-based step cursor and
the ``loading`` flag that guards against double submission.  Between requests
it is stored in the Django session as plain JSON.
"""
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Optional

from .clipboard import CopyFeedback
from .roles import Role, Step, parse_role, role_label, step_flow_for
from .validators import run_step_gate

logger = logging.getLogger(__name__)

LEARNER_ONLY_FIELDS = ('grade', 'parent_name', 'parent_phone', 'parent_email')


@dataclass
class FormData:
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    phone: str = ''
    password: str = ''
    confirm_password: str = ''
    role: str = ''
    id_number: str = ''
    address: str = ''
    grade: str = ''
    parent_name: str = ''
    parent_phone: str = ''
    parent_email: str = ''

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    def update(self, **values):
        for name, value in values.items():
            if name not in self.field_names():
                raise AttributeError(f"FormData has no field {name!r}")
            setattr(self, name, '' if value is None else str(value))

    @property
    def is_learner(self):
        return parse_role(self.role) == Role.LEARNER

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def signup_metadata(self):
        """User metadata sent with the account creation call"""
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'role': self.role,
            'phone': self.phone,
        }

    def registration_fields(self):
        """Columns written to the registration row after the account exists"""
        values = {
            'phone': self.phone,
            'id_number': self.id_number,
            'address': self.address,
            'grade': self.grade,
            'parent_name': self.parent_name,
            'parent_phone': self.parent_phone,
            'parent_email': self.parent_email,
        }
        if not self.is_learner:
            for name in LEARNER_ONLY_FIELDS:
                values[name] = ''
        return values


@dataclass
class UploadedFiles:
    id_document: Optional[str] = None
    proof_of_address: Optional[str] = None
    proof_of_payment: Optional[str] = None

    LABELS = {
        'id_document': 'ID Document',
        'proof_of_address': 'Proof of Address',
        'proof_of_payment': 'Proof of Payment',
    }

    def attach(self, key, uploaded_file):
        """Remember the picked file by name; the bytes are not kept here"""
        if key not in self.LABELS:
            raise KeyError(key)
        setattr(self, key, getattr(uploaded_file, 'name', None) or None)
        return getattr(self, key)


@dataclass
class SignupWizard:
    SESSION_KEY = 'signup_wizard'

    form_data: FormData = field(default_factory=FormData)
    uploaded_files: UploadedFiles = field(default_factory=UploadedFiles)
    step: int = 1
    loading: bool = False
    copy_feedback: CopyFeedback = field(default_factory=CopyFeedback)

    # ------------------------------------------------------------------
    # Step configuration
    # ------------------------------------------------------------------
    @property
    def steps(self):
        return step_flow_for(self.form_data.role)

    @property
    def total_steps(self):
        return len(self.steps)

    @property
    def step_labels(self):
        return [step.label for step in self.steps]

    @property
    def current_step(self):
        return self.steps[self.step - 1]

    @property
    def is_first(self):
        return self.step == 1

    @property
    def is_terminal(self):
        return self.step == self.total_steps

    @property
    def role_label(self):
        return role_label(self.form_data.role)

    def progress(self):
        """Step indicator rows: number, label and done/current/upcoming state"""
        rows = []
        for number, step in enumerate(self.steps, start=1):
            if number < self.step:
                state = 'done'
            elif number == self.step:
                state = 'current'
            else:
                state = 'upcoming'
            rows.append({'number': number, 'step': step.value, 'label': step.label, 'state': state})
        return rows

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select_role(self, role):
        parsed = parse_role(role)
        if parsed is None:
            raise ValueError(f"Unknown role: {role!r}")
        self.form_data.role = parsed.value
        # A shorter flow must not leave the cursor past its end
        self.step = min(self.step, self.total_steps)

    def update(self, **values):
        self.form_data.update(**values)

    def advance(self):
        """Run the current step's gate and move forward one step.

        Raises ``StepValidationError`` and leaves the cursor alone when the
        gate rejects the data.  The terminal step has no forward move.
        """
        if self.is_terminal:
            return self.step
        run_step_gate(self.current_step, self.form_data)
        self.step += 1
        logger.debug(f"Signup wizard advanced to step {self.step} ({self.current_step})")
        return self.step

    def retreat(self):
        if not self.is_first:
            self.step -= 1
        return self.step

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------
    def to_dict(self):
        return {
            'form_data': asdict(self.form_data),
            'uploaded_files': asdict(self.uploaded_files),
            'step': self.step,
            'loading': self.loading,
            'copy_feedback': asdict(self.copy_feedback),
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        form_values = {
            key: value for key, value in (data.get('form_data') or {}).items()
            if key in FormData.field_names()
        }
        wizard = cls(
            form_data=FormData(**form_values),
            uploaded_files=UploadedFiles(**(data.get('uploaded_files') or {})),
            step=int(data.get('step') or 1),
            loading=bool(data.get('loading', False)),
            copy_feedback=CopyFeedback(**(data.get('copy_feedback') or {})),
        )
        wizard.step = max(1, min(wizard.step, wizard.total_steps))
        return wizard

    @classmethod
    def load(cls, session):
        return cls.from_dict(session.get(cls.SESSION_KEY))

    def save(self, session):
        session[self.SESSION_KEY] = self.to_dict()

    @classmethod
    def discard(cls, session):
        session.pop(cls.SESSION_KEY, None)
