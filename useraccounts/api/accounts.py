"""Account pages: login, registration, profile editing, deletion and logout."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from useraccounts.api.dependencies import get_account_controller
from useraccounts.schemas.forms import EditForm, LoginForm, RegisterForm
from useraccounts.services import sessions
from useraccounts.services.accounts import AccountController, Directive, Redirect, Render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

Controller = Annotated[AccountController, Depends(get_account_controller)]


def respond(request: Request, directive: Directive) -> Response:
    """Turn a controller directive into an HTTP response."""
    if isinstance(directive, Redirect):
        return RedirectResponse(str(request.url_for(directive.route)), status_code=303)

    context = {"flashes": sessions.pop_flashes(request.session), **directive.context}
    return templates.TemplateResponse(
        request, directive.template, context, status_code=directive.status_code
    )


def with_form_errors(directive: Directive, error: ValidationError, **context) -> Directive:
    """Re-render a form page with validation messages."""
    if isinstance(directive, Redirect):
        return directive
    messages = [err["msg"].removeprefix("Value error, ") for err in error.errors()]
    logger.debug(f"Invalid form for {directive.template}: {messages}")
    return Render(
        directive.template,
        {**directive.context, **context, "form_errors": messages},
        status_code=400,
    )


@router.get("/", name="login")
def login_page(request: Request, controller: Controller):
    """Show the login form."""
    return respond(request, controller.login_form(request.session))


@router.post("/", name="login_submit")
def login(
    request: Request,
    controller: Controller,
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Log in with email and password."""
    try:
        form = LoginForm(email=email, password=password)
    except ValidationError as e:
        return respond(request, with_form_errors(controller.login_form(request.session), e, email=email))
    return respond(request, controller.login(request.session, form))


@router.get("/user/register", name="user_register")
def register_page(request: Request, controller: Controller):
    """Show the registration form."""
    return respond(request, controller.register_form(request.session))


@router.post("/user/register", name="user_register_submit")
def register(
    request: Request,
    controller: Controller,
    email: Annotated[str, Form()] = "",
    name: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Register a new user."""
    try:
        form = RegisterForm(email=email, name=name, password=password)
    except ValidationError as e:
        directive = with_form_errors(
            controller.register_form(request.session), e, email=email, name=name
        )
        return respond(request, directive)
    return respond(request, controller.register(request.session, form))


@router.get("/user/edit", name="user_edit")
def edit_page(request: Request, controller: Controller):
    """Show the profile form of the logged in user."""
    return respond(request, controller.edit(request.session))


@router.post("/user/edit", name="user_update")
def update(
    request: Request,
    controller: Controller,
    email: Annotated[str, Form()] = "",
    name: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    new_password: Annotated[str | None, Form()] = None,
    new_password_repeat: Annotated[str | None, Form()] = None,
):
    """Update the logged in user's profile."""
    try:
        form = EditForm(
            email=email,
            name=name,
            password=password,
            new_password=new_password,
            new_password_repeat=new_password_repeat,
        )
    except ValidationError as e:
        return respond(request, with_form_errors(controller.edit(request.session), e))
    return respond(request, controller.update(request.session, form))


@router.post("/user/delete", name="user_delete")
def delete(request: Request, controller: Controller):
    """Delete the logged in user's account."""
    return respond(request, controller.delete(request.session))


@router.get("/logout", name="logout")
def logout(request: Request, controller: Controller):
    """Log out and forget the session."""
    return respond(request, controller.logout(request.session))
