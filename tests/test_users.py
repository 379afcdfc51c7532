"""User store tests."""

import pytest

from useraccounts.models.user import User
from useraccounts.services.exceptions import ConflictError
from useraccounts.services.passwords import hash_password, verify_password


def test_create_user(store, db):
    """Test creating a user assigns an id and stores a verifiable hash."""
    user = store.create("new@example.com", "New User", hash_password("pw123456"))

    assert user.id is not None
    assert user.email == "new@example.com"
    assert user.name == "New User"
    assert verify_password("pw123456", user.password_hash)
    assert db.query(User).count() == 1


def test_create_duplicate_email(store, db, user):
    """Test a second user with the same email is rejected."""
    with pytest.raises(ConflictError):
        store.create(user.email, "Someone Else", hash_password("pw123456"))

    assert db.query(User).filter(User.email == user.email).count() == 1


def test_email_is_case_insensitive(store, user):
    """Test emails are normalized before storing and looking up."""
    with pytest.raises(ConflictError):
        store.create("  ANN@Example.com ", "Ann Again", hash_password("pw123456"))

    assert store.find_by_email("Ann@EXAMPLE.com").id == user.id


def test_find_by_id(store, user):
    """Test finding users by id."""
    assert store.find_by_id(user.id).email == user.email
    assert store.find_by_id(user.id + 1000) is None


def test_find_by_email_and_hash(store, user):
    """Test the exact-match lookup on email and stored hash."""
    assert store.find_by_email_and_hash(user.email, user.password_hash).id == user.id
    assert store.find_by_email_and_hash(user.email, hash_password("testpass123")) is None
    assert store.find_by_email_and_hash("other@example.com", user.password_hash) is None


def test_update_user(store, user):
    """Test updating name, email and password hash."""
    user.name = "Ann Smith"
    user.email = "ann.smith@example.com"
    user.password_hash = hash_password("newpass123")
    store.update(user)

    reloaded = store.find_by_id(user.id)
    assert reloaded.name == "Ann Smith"
    assert reloaded.email == "ann.smith@example.com"
    assert verify_password("newpass123", reloaded.password_hash)


def test_update_keeps_own_email(store, user):
    """Test saving a user without changing the email is not a conflict."""
    user.name = "Annie"
    store.update(user)
    assert store.find_by_id(user.id).name == "Annie"


def test_update_email_conflict(store, user):
    """Test taking another user's email is rejected and nothing changes."""
    other = store.create("bob@example.com", "Bob", hash_password("pw123456"))

    other.email = user.email
    other.name = "Robert"
    with pytest.raises(ConflictError):
        store.update(other)

    reloaded = store.find_by_id(other.id)
    assert reloaded.email == "bob@example.com"
    assert reloaded.name == "Bob"


def test_delete_user(store, user):
    """Test deleting removes the row."""
    user_id = user.id
    store.delete(user_id)
    assert store.find_by_id(user_id) is None


def test_delete_unknown_user(store):
    """Test deleting an unknown id is a no-op."""
    store.delete(12345)
