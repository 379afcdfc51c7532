"""Pydantic schemas for form payloads."""

from useraccounts.schemas.forms import EditForm, LoginForm, RegisterForm

__all__ = [
    "LoginForm",
    "RegisterForm",
    "EditForm",
]
