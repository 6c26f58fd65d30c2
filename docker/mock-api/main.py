"""
Mock identity provider and users API for token refresh testing

Issues client-credentials tokens with a real lifetime and serves a small users
table behind bearer authentication, so a client running with token debug mode
can be pointed at it and observed refreshing tokens.
"""

import secrets
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Depends, FastAPI, Form, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials, HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

app = FastAPI(title="Mock API", description="Token issuing and users endpoints")

# Security schemes
client_security = HTTPBasic()
bearer_security = HTTPBearer(auto_error=False)

# Configured client for the client credentials grant
CLIENT_ID = "test-client"
CLIENT_SECRET = "test-secret"
TOKEN_LIFETIME_SECONDS = 3600

# access token -> expiry
issued_tokens: dict[str, datetime] = {}

db_lock = threading.Lock()
db = sqlite3.connect(":memory:", check_same_thread=False)
db.row_factory = sqlite3.Row
db.execute(
    "CREATE TABLE users ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT NOT NULL, "
    "email TEXT NOT NULL UNIQUE)"
)


class TokenResponse(BaseModel):
    """Response model for the token endpoint"""
    access_token: str
    token_type: str
    expires_in: int


class UserIn(BaseModel):
    name: str
    email: str


class User(BaseModel):
    id: int
    name: str
    email: str


def verify_client(
    credentials: Annotated[HTTPBasicCredentials, Depends(client_security)]
) -> str:
    """Verify client id and secret sent as HTTP basic auth"""
    is_valid_client = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        CLIENT_ID.encode("utf-8")
    )
    is_valid_secret = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        CLIENT_SECRET.encode("utf-8")
    )

    if not (is_valid_client and is_valid_secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid client credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def prune_expired_tokens(now: datetime) -> None:
    """Forget issued tokens whose lifetime has passed"""
    for token, expires_at in list(issued_tokens.items()):
        if now >= expires_at:
            del issued_tokens[token]


def verify_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_security)]
) -> str:
    """Verify the bearer token was issued here and has not expired"""
    expires_at = issued_tokens.get(credentials.credentials) if credentials else None
    if expires_at is None or datetime.now(timezone.utc) >= expires_at:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return credentials.credentials


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.post("/oauth2/token", response_model=TokenResponse)
async def issue_token(
    client_id: Annotated[str, Depends(verify_client)],
    grant_type: Annotated[str, Form()],
    scope: Annotated[str | None, Form()] = None,
):
    """
    OAuth2 token endpoint supporting only the client credentials grant.

    Credentials:
    - Client id: test-client
    - Client secret: test-secret
    """
    if grant_type != "client_credentials":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="unsupported_grant_type",
        )

    now = datetime.now(timezone.utc)
    prune_expired_tokens(now)

    access_token = secrets.token_urlsafe(32)
    issued_tokens[access_token] = now + timedelta(
        seconds=TOKEN_LIFETIME_SECONDS
    )
    return TokenResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=TOKEN_LIFETIME_SECONDS,
    )


@app.get("/users", response_model=list[User])
async def list_users(
    token: Annotated[str, Depends(verify_bearer_token)]
):
    with db_lock:
        rows = db.execute("SELECT id, name, email FROM users ORDER BY id").fetchall()
    return [dict(row) for row in rows]


@app.post("/users", response_model=User)
async def create_user(
    body: UserIn,
    token: Annotated[str, Depends(verify_bearer_token)]
):
    with db_lock:
        try:
            with db:
                db.execute(
                    "INSERT INTO users(name, email) VALUES (?, ?)",
                    (body.name, body.email),
                )
        except sqlite3.IntegrityError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )
        row = db.execute(
            "SELECT id, name, email FROM users WHERE email = ?", (body.email,)
        ).fetchone()
    return dict(row)
