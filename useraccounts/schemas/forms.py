"""Form payloads accepted by the account pages."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field, model_validator


def reject_nul(value: str) -> str:
    """Passwords may not contain NUL characters."""
    if "\x00" in value:
        raise ValueError("Passwords may not contain NUL characters.")
    return value


Password = Annotated[str, Field(min_length=1, max_length=128), AfterValidator(reject_nul)]
OptionalPassword = Annotated[str, Field(max_length=128), AfterValidator(reject_nul)] | None


class LoginForm(BaseModel):
    """Login form."""

    email: EmailStr = Field(..., max_length=255)
    password: Password


class RegisterForm(BaseModel):
    """Registration form."""

    email: EmailStr = Field(..., max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    password: Password


class EditForm(BaseModel):
    """Profile edit form.

    ``password`` is the current password and is always required. The new
    password is optional; when given it must be repeated identically.
    """

    email: EmailStr = Field(..., max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    password: Password
    new_password: OptionalPassword = None
    new_password_repeat: OptionalPassword = None

    @model_validator(mode="after")
    def check_new_passwords_match(self) -> "EditForm":
        """Both new password fields must agree."""
        if (self.new_password or "") != (self.new_password_repeat or ""):
            raise ValueError("The password fields must match.")
        return self
