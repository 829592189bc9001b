# accounts/tests/factories.py
import factory
from factory.django import DjangoModelFactory
from django.contrib.auth import get_user_model

from accounts.models import Registration
from accounts.roles import Role

User = get_user_model()


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f'user{n}@ogwini.co.za')
    email = factory.LazyAttribute(lambda o: o.username)
    password = factory.django.Password('password123')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    role = Role.LEARNER
    phone_number = '0821234567'


class TeacherUserFactory(UserFactory):
    role = Role.TEACHER


def wizard_post(**overrides):
    """Field values for a fully valid account step"""
    data = {
        'first_name': 'Thandi',
        'last_name': 'Mkhize',
        'email': 'thandi@example.com',
        'phone': '0821234567',
        'password': 'abc123',
        'confirm_password': 'abc123',
    }
    data.update(overrides)
    return data

class RegistrationFactory(DjangoModelFactory):
    class Meta:
        model = Registration

    user = factory.SubFactory(UserFactory)
    role = factory.LazyAttribute(lambda o: o.user.role)
    first_name = factory.LazyAttribute(lambda o: o.user.first_name)
    last_name = factory.LazyAttribute(lambda o: o.user.last_name)
    email = factory.LazyAttribute(lambda o: o.user.email)
    id_number = factory.Sequence(lambda n: f'0101015{n:06d}')
    address = '12 Mangosuthu Highway, Umlazi'
    grade = 'Grade 10'

    @classmethod
    def _create(cls, model_class, user, **kwargs):
        # Saving the user already opened the row; fill it in rather than adding a second one
        registration, _ = model_class.objects.get_or_create(user=user)
        for name, value in kwargs.items():
            setattr(registration, name, value)
        registration.save()
        return registration
