"""
Schémas d'authentification / Authentication schemas.
Inscription, login, tokens, refresh.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from carcost.config import settings


class RegisterRequest(BaseModel):
    """Requête d'inscription / Registration request."""
    email: EmailStr
    password: str = Field(min_length=settings.MIN_PASSWORD_LENGTH, max_length=200)
    confirm_password: str

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Requête de connexion / Login request."""
    email: EmailStr
    password: str = Field(min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """Réponse avec tokens / Token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """Requête de rafraîchissement / Refresh request."""
    refresh_token: str


class UserMe(BaseModel):
    id: str
    email: str
    created_at: datetime | None = None
    model_config = {"from_attributes": True}
