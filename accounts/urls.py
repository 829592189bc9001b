from django.urls import path
from .views import (
    SignupWizardView, SignInView, SignOutView, copy_banking_detail, reset_signup
)

urlpatterns = [
    # Registration wizard
    path('signup/', SignupWizardView.as_view(), name='signup'),
    path('signup/copy/', copy_banking_detail, name='signup_copy'),
    path('signup/reset/', reset_signup, name='signup_reset'),

    path('signin/', SignInView.as_view(), name='signin'),
    path('signout/', SignOutView.as_view(), name='signout'),
]
