from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from invoicedash.actions.auth import authenticate
from invoicedash.config import settings
from invoicedash.database import Database, get_db
from invoicedash.identity import AccessDenied, Identity, decode_access_token

router = APIRouter(tags=["Auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

class User(BaseModel):
    """The signed-in user, as carried in the session token."""
    id: str
    email: str
    name: str = ""

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

async def get_identity(database: Database = Depends(get_db)) -> Identity:
    return Identity(database.users)

async def get_current_active_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme)
) -> User:
    # Browsers send the session cookie, API clients a bearer token
    token = token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(token)
    except AccessDenied:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return User(id=payload["sub"], email=payload.get("email", ""), name=payload.get("name", ""))

@router.post("/login")
async def login(request: Request, identity: Identity = Depends(get_identity)):
    form = await request.form()
    result = await authenticate(None, form, identity)
    if isinstance(result, str):
        return JSONResponse({"message": result}, status_code=401)

    response = RedirectResponse(url=result.redirect.path, status_code=303)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        result.token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    return response

@router.post("/api/auth/token", response_model=Token)
async def issue_token(request: Request, identity: Identity = Depends(get_identity)):
    # OAuth2 clients send `username`; the dashboard form sends `email`
    form = await request.form()
    credentials = {
        "email": form.get("email") or form.get("username"),
        "password": form.get("password"),
    }
    result = await authenticate(None, credentials, identity)
    if isinstance(result, str):
        raise HTTPException(status_code=401, detail=result)
    return Token(access_token=result.token)
