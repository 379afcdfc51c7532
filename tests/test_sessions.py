"""Session binding tests."""

from useraccounts.services import sessions


def test_bind_and_read_user():
    """Test binding a session to a user."""
    session = {}
    assert sessions.get_user(session) is None

    sessions.set_user(session, 7)
    assert sessions.get_user(session) == 7

    sessions.set_user(session, 9)
    assert sessions.get_user(session) == 9


def test_garbage_user_id_is_ignored():
    """Test a tampered binding reads as logged out."""
    assert sessions.get_user({sessions.USER_KEY: "abc"}) is None


def test_clear_resets_everything():
    """Test clearing removes all session state."""
    session = {"theme": "dark"}
    sessions.set_user(session, 7)
    sessions.flash(session, "success", "Hi")

    sessions.clear(session)

    assert session == {}
    assert sessions.get_user(session) is None


def test_flashes_are_consumed_once():
    """Test flash messages are returned in order and then removed."""
    session = {}
    sessions.flash(session, "success", "Saved")
    sessions.flash(session, "error", "Oops")

    assert sessions.pop_flashes(session) == [("success", "Saved"), ("error", "Oops")]
    assert sessions.pop_flashes(session) == []
