# core/supabase_auth.py
# Custom DRF authentication class to verify Supabase JWTs

import logging

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger("fdp.auth")

User = get_user_model()


class SupabaseJWTAuthentication(BaseAuthentication):
    """
    Custom authentication class that validates Supabase JWTs.

    This authenticator:
    1. Extracts the JWT from the Authorization header
    2. Verifies the token signature using the Supabase JWT secret
    3. Looks up or creates a local user for the Supabase user ID

    The token only asserts identity (uid + email). The portal role
    (faculty / hod / iqac) lives on the local user record.
    """

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ", 1)[1]

        supabase_jwt_secret = getattr(settings, "SUPABASE_JWT_SECRET", None)
        if not supabase_jwt_secret:
            return None

        try:
            # Supabase uses HS256 by default
            payload = jwt.decode(
                token,
                supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid Supabase token: {e}")
            return None  # Let other auth backends try

        supabase_user_id = payload.get("sub")
        email = payload.get("email")

        if not supabase_user_id:
            raise AuthenticationFailed("Invalid token: missing user ID")

        user = self._get_or_create_user(supabase_user_id, email)
        return (user, payload)

    def authenticate_header(self, request):
        return "Bearer"

    def _get_or_create_user(self, supabase_user_id: str, email: str | None):
        """
        Resolve the local user for a Supabase identity.

        Lookup order: stored supabase_uid, then email (linking the uid on
        first sight), then a fresh faculty account.
        """
        user = User.objects.filter(supabase_uid=supabase_user_id).first()
        if user:
            return user

        if not email:
            raise AuthenticationFailed("Token missing email claim")

        user = User.objects.filter(email=email).first()
        if user:
            user.supabase_uid = supabase_user_id
            user.save(update_fields=["supabase_uid"])
            return user

        username = email.split("@")[0]
        # Ensure unique username
        base_username = username
        counter = 1
        while User.objects.filter(username=username).exists():
            username = f"{base_username}_{counter}"
            counter += 1

        user = User.objects.create(
            username=username,
            email=email,
            supabase_uid=supabase_user_id,
            # Password is not used for Supabase auth
        )
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info(f"Created new user from Supabase: {email}")

        return user
