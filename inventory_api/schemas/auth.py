"""Pydantic schemas for signup / login."""

from __future__ import annotations

from pydantic import BaseModel


class SignupRequest(BaseModel):
    # Presence is checked by the endpoint so a missing field is a 400
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str
