from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from accounts.roles import Step
from accounts.wizard import FormData, SignupWizard, UploadedFiles
from core.exceptions import StepValidationError

from .factories import wizard_post


class FormDataTest(SimpleTestCase):

    def test_update_rejects_unknown_fields(self):
        with self.assertRaises(AttributeError):
            FormData().update(nickname='TJ')

    def test_registration_fields_for_learner_keep_guardian_details(self):
        data = FormData(role='learner', grade='Grade 10', parent_name='Sipho Mkhize')
        values = data.registration_fields()
        self.assertEqual(values['grade'], 'Grade 10')
        self.assertEqual(values['parent_name'], 'Sipho Mkhize')

    def test_registration_fields_blank_learner_details_for_staff(self):
        data = FormData(role='teacher', grade='Grade 10', parent_email='p@example.com',
                        id_number='8001015009087')
        values = data.registration_fields()
        self.assertEqual(values['grade'], '')
        self.assertEqual(values['parent_email'], '')
        self.assertEqual(values['id_number'], '8001015009087')

    def test_signup_metadata(self):
        data = FormData(**wizard_post(), role='principal')
        self.assertEqual(data.signup_metadata(), {
            'first_name': 'Thandi',
            'last_name': 'Mkhize',
            'role': 'principal',
            'phone': '0821234567',
        })


class UploadedFilesTest(SimpleTestCase):

    def test_attach_keeps_only_the_name(self):
        files = UploadedFiles()
        name = files.attach('proof_of_payment', SimpleUploadedFile('receipt.pdf', b'%PDF'))
        self.assertEqual(name, 'receipt.pdf')
        self.assertEqual(files.proof_of_payment, 'receipt.pdf')

    def test_attach_unknown_slot(self):
        with self.assertRaises(KeyError):
            UploadedFiles().attach('photo', SimpleUploadedFile('me.png', b'png'))


class SignupWizardTest(SimpleTestCase):

    def test_starts_on_role_step(self):
        wizard = SignupWizard()
        self.assertEqual(wizard.step, 1)
        self.assertEqual(wizard.current_step, Step.ROLE)
        self.assertTrue(wizard.is_first)
        self.assertFalse(wizard.loading)

    def test_learner_flow_has_five_steps(self):
        wizard = SignupWizard()
        wizard.select_role('learner')
        self.assertEqual(wizard.total_steps, 5)
        self.assertEqual(wizard.step_labels, ['Role', 'Account', 'Details', 'Payment', 'Complete'])

    def test_staff_flow_has_four_steps(self):
        wizard = SignupWizard()
        wizard.select_role('grade_head')
        self.assertEqual(wizard.total_steps, 4)
        self.assertEqual(wizard.step_labels, ['Role', 'Account', 'Details', 'Complete'])

    def test_select_unknown_role(self):
        with self.assertRaises(ValueError):
            SignupWizard().select_role('janitor')

    def test_advance_blocked_without_role(self):
        wizard = SignupWizard()
        with self.assertRaises(StepValidationError):
            wizard.advance()
        self.assertEqual(wizard.step, 1)

    def test_advance_through_learner_flow(self):
        wizard = SignupWizard()
        wizard.select_role('learner')
        wizard.advance()
        wizard.update(**wizard_post())
        wizard.advance()
        self.assertEqual(wizard.current_step, Step.DETAILS)

        with self.assertRaises(StepValidationError):
            wizard.advance()
        wizard.update(grade='Grade 10')
        wizard.advance()
        self.assertEqual(wizard.current_step, Step.PAYMENT)
        wizard.advance()
        self.assertTrue(wizard.is_terminal)
        self.assertEqual(wizard.current_step, Step.COMPLETE)

    def test_advance_on_terminal_step_stays_put(self):
        wizard = SignupWizard(step=4)
        wizard.select_role('teacher')
        self.assertEqual(wizard.advance(), 4)

    def test_retreat_stops_at_first_step(self):
        wizard = SignupWizard(step=2)
        self.assertEqual(wizard.retreat(), 1)
        self.assertEqual(wizard.retreat(), 1)

    def test_role_change_keeps_data_and_clamps_step(self):
        wizard = SignupWizard()
        wizard.select_role('learner')
        wizard.update(**wizard_post())
        wizard.step = 5

        wizard.select_role('teacher')

        self.assertEqual(wizard.step, 4)
        self.assertEqual(wizard.current_step, Step.COMPLETE)
        self.assertEqual(wizard.form_data.email, 'thandi@example.com')

    def test_progress_states(self):
        wizard = SignupWizard(step=2)
        wizard.select_role('teacher')
        states = [row['state'] for row in wizard.progress()]
        self.assertEqual(states, ['done', 'current', 'upcoming', 'upcoming'])


class SignupWizardSessionTest(SimpleTestCase):

    def test_round_trip_through_session(self):
        session = {}
        wizard = SignupWizard()
        wizard.select_role('learner')
        wizard.update(**wizard_post(), grade='Grade 11')
        wizard.uploaded_files.attach('id_document', SimpleUploadedFile('id.png', b'png'))
        wizard.step = 3
        wizard.save(session)

        restored = SignupWizard.load(session)

        self.assertEqual(restored.form_data, wizard.form_data)
        self.assertEqual(restored.uploaded_files.id_document, 'id.png')
        self.assertEqual(restored.step, 3)

    def test_load_from_empty_session(self):
        wizard = SignupWizard.load({})
        self.assertEqual(wizard.step, 1)
        self.assertEqual(wizard.form_data, FormData())

    def test_load_clamps_out_of_range_step(self):
        wizard = SignupWizard.from_dict({'form_data': {'role': 'teacher'}, 'step': 9})
        self.assertEqual(wizard.step, 4)

    def test_load_ignores_unknown_form_keys(self):
        wizard = SignupWizard.from_dict({'form_data': {'role': 'teacher', 'legacy': 'x'}})
        self.assertEqual(wizard.form_data.role, 'teacher')

    def test_discard(self):
        session = {}
        SignupWizard().save(session)
        SignupWizard.discard(session)
        self.assertNotIn(SignupWizard.SESSION_KEY, session)
