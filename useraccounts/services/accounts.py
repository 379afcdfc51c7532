"""Account flows: login, registration, profile editing, deletion and logout.

Each operation receives the client's session mapping and a validated form,
and returns a directive for the web layer: either a page to render or a
named route to redirect to. Nothing is kept on the controller between
requests; durable state lives in the session and in the user store.
"""

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any

from useraccounts.models.user import User
from useraccounts.schemas.forms import EditForm, LoginForm, RegisterForm
from useraccounts.services import sessions
from useraccounts.services.exceptions import (
    ConflictError,
    CurrentPasswordMismatch,
    InvalidCredentials,
    NotAuthenticated,
)
from useraccounts.services.passwords import dummy_verify, hash_password, verify_password
from useraccounts.services.users import UserStore

logger = logging.getLogger(__name__)

Session = MutableMapping[str, Any]

LOGIN_FAILED_MESSAGE = "User is not found with given email and password combination."
EMAIL_TAKEN_MESSAGE = "Email already registered."
LOGIN_REQUIRED_MESSAGE = "Please login first."
WRONG_PASSWORD_MESSAGE = "Current password is wrong!"


@dataclass(frozen=True)
class Render:
    """Render a template with the given context."""

    template: str
    context: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    """Redirect to a named route."""

    route: str


Directive = Render | Redirect


class AccountController:
    """Orchestrates the account pages on top of the user store."""

    def __init__(self, store: UserStore):
        self.store = store

    def current_user(self, session: Session) -> User:
        """Return the user bound to the session.

        Raises:
            NotAuthenticated: if the session is unbound or its user is gone.
        """
        user_id = sessions.get_user(session)
        if user_id is None:
            raise NotAuthenticated("Session is not bound to a user")
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotAuthenticated(f"User {user_id} no longer exists")
        return user

    def is_logged_in(self, session: Session) -> bool:
        try:
            self.current_user(session)
        except NotAuthenticated:
            return False
        return True

    def login_form(self, session: Session) -> Directive:
        return Render("user/login.html", {"logged_in": self.is_logged_in(session)})

    def login(self, session: Session, form: LoginForm) -> Directive:
        """Bind the session to the user matching the submitted credentials."""
        try:
            user = self._authenticate(form.email, form.password)
        except InvalidCredentials:
            logger.info(f"Failed login for {form.email}")
            return Render(
                "user/login.html",
                {"logged_in": False, "error": LOGIN_FAILED_MESSAGE, "email": form.email},
                status_code=400,
            )

        sessions.set_user(session, user.id)
        logger.info(f"User {user.id} logged in")
        return Redirect("user_edit")

    def register_form(self, session: Session) -> Directive:
        return Render("user/register.html")

    def register(self, session: Session, form: RegisterForm) -> Directive:
        """Create an account and log it in."""
        try:
            user = self.store.create(form.email, form.name, hash_password(form.password))
        except ConflictError:
            logger.info(f"Registration refused, {form.email} already registered")
            return Render(
                "user/register.html",
                {"error": EMAIL_TAKEN_MESSAGE, "email": form.email, "name": form.name},
                status_code=400,
            )

        sessions.set_user(session, user.id)
        sessions.flash(session, "success", "Your account has been created successfully.")
        return Redirect("login")

    def edit(self, session: Session) -> Directive:
        """Show the profile form of the logged in user."""
        try:
            user = self.current_user(session)
        except NotAuthenticated:
            return self._login_required(session)

        return Render("user/edit.html", {"user": user})

    def update(self, session: Session, form: EditForm) -> Directive:
        """Apply a profile change after re-checking the current password."""
        try:
            user = self.current_user(session)
        except NotAuthenticated:
            return self._login_required(session)

        try:
            self._check_current_password(user, form.password)
        except CurrentPasswordMismatch:
            logger.info(f"User {user.id} submitted a wrong current password")
            sessions.flash(session, "error", WRONG_PASSWORD_MESSAGE)
            return Redirect("user_edit")

        user.name = form.name
        user.email = form.email
        if form.new_password:
            user.password_hash = hash_password(form.new_password)

        try:
            self.store.update(user)
        except ConflictError:
            sessions.flash(session, "error", EMAIL_TAKEN_MESSAGE)
            return Redirect("user_edit")

        sessions.flash(session, "success", "Your data has been updated!")
        return Redirect("user_edit")

    def delete(self, session: Session) -> Directive:
        """Delete the logged in user's account and log out."""
        try:
            user = self.current_user(session)
        except NotAuthenticated:
            return self._login_required(session)

        self.store.delete(user.id)
        redirect = self.logout(session)
        sessions.flash(session, "success", "Your account has been deleted successfully.")
        return redirect

    def logout(self, session: Session) -> Directive:
        sessions.clear(session)
        return Redirect("login")

    def _authenticate(self, email: str, password: str) -> User:
        user = self.store.find_by_email(email)
        if user is None:
            # Keep timing the same whether or not the email exists.
            dummy_verify()
            raise InvalidCredentials(email)
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials(email)
        return user

    def _check_current_password(self, user: User, password: str) -> None:
        if not verify_password(password, user.password_hash):
            raise CurrentPasswordMismatch(f"Wrong current password for user {user.id}")

    def _login_required(self, session: Session) -> Redirect:
        sessions.flash(session, "error", LOGIN_REQUIRED_MESSAGE)
        return Redirect("login")
