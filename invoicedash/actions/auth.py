from typing import Any, Mapping, Optional, Union

from invoicedash.identity import AuthError, CredentialsSignin, Identity, SignInResult

async def authenticate(
    previous_state: Optional[str],
    form: Mapping[str, Any],
    identity: Identity,
) -> Union[str, SignInResult]:
    """
    Sign in with the credentials provider.

    Returns the user-facing error message for authentication failures, or the
    identity's sign-in result (session plus where to go next) on success.
    Both are truthy, so tell them apart with isinstance(result, str) rather
    than treating any returned value as an error.
    Anything that isn't an AuthError is re-raised.
    """
    try:
        return await identity.sign_in("credentials", form)
    except AuthError as error:
        if error.type == CredentialsSignin.type:
            return "Invalid credentials."
        return "Something went wrong."
