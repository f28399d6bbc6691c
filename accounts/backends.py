from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    """Authenticate with an email address instead of a username."""

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        email = email or username
        if not email or password is None:
            return None
        UserModel = get_user_model()
        user = UserModel._default_manager.filter(email__iexact=email.strip()).order_by("pk").first()
        if user is None:
            # Run the hasher anyway so response times don't reveal unknown emails.
            UserModel().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
