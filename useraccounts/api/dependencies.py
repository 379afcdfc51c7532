"""FastAPI dependencies for the account services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from useraccounts.database import get_db
from useraccounts.services.accounts import AccountController
from useraccounts.services.users import UserStore


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    """Get user store bound to the request's database session."""
    return UserStore(db)


def get_account_controller(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> AccountController:
    """Get account controller with dependencies."""
    return AccountController(store)
