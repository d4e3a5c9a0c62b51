"""
Credential sign-in.

`Identity.sign_in` is the only entry point the rest of the app uses. Failures
are raised as AuthError subclasses whose `type` says what went wrong; anything
else (for example the database being down) is not an AuthError and escapes
unchanged.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import bcrypt
import jwt
from pydantic import BaseModel, Field, ValidationError

from invoicedash.config import settings
from invoicedash.models.state import Redirect
from invoicedash.models.user import User
from invoicedash.repositories.user import UserRepository

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

class AuthError(Exception):
    type: str = "AuthError"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.type)

class CredentialsSignin(AuthError):
    type = "CredentialsSignin"

class AccessDenied(AuthError):
    type = "AccessDenied"

class InvalidProvider(AuthError):
    type = "InvalidProvider"

class Credentials(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)

class SignInResult(BaseModel):
    user_id: str
    token: str
    redirect: Redirect

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the users table
        return False

def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload = {"sub": user.id, "email": user.email, "name": user.name, "exp": expires}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=JWT_ALGORITHM)

def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises AccessDenied for expired or tampered tokens."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise AccessDenied(str(e)) from e

class CredentialsProvider:
    """Email + password checked against the bcrypt hash in the users table."""
    name = "credentials"

    def __init__(self, users: UserRepository):
        self.users = users

    async def authorize(self, form: Mapping[str, Any]) -> Optional[User]:
        try:
            credentials = Credentials.model_validate({
                "email": form.get("email"),
                "password": form.get("password"),
            })
        except ValidationError:
            return None

        user = await self.users.get_by_email(credentials.email)
        if not user:
            return None
        if not verify_password(credentials.password, user.password):
            return None
        return user

class Identity:
    def __init__(self, users: UserRepository, redirect_to: str = settings.LOGIN_REDIRECT):
        self.providers = {CredentialsProvider.name: CredentialsProvider(users)}
        self.redirect_to = redirect_to

    async def sign_in(self, provider: str, form: Mapping[str, Any]) -> SignInResult:
        if provider not in self.providers:
            raise InvalidProvider(f"Unknown sign-in provider: {provider}")

        user = await self.providers[provider].authorize(form)
        if user is None:
            logger.warning(f"Rejected {provider} sign-in for {form.get('email')!r}")
            raise CredentialsSignin()

        logger.info(f"User {user.id} signed in")
        return SignInResult(
            user_id=user.id,
            token=create_access_token(user),
            redirect=Redirect(path=self.redirect_to)
        )
