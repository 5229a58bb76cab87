"""Tests for local authentication.

**Feature: trade-journal**
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.auth import LocalAuth, user_id_for


@pytest.fixture
def session_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "session.toml"


class TestUserIds:
    """
    **Feature: trade-journal, Property 26: Stable User Identity**

    *For any* email, the derived user id ignores case and surrounding
    whitespace.
    """

    @given(local=st.from_regex(r"[a-z0-9]{1,12}", fullmatch=True))
    @settings(max_examples=50)
    def test_case_insensitive(self, local: str):
        email = f"{local}@example.com"

        assert user_id_for(email) == user_id_for(f"  {email.upper()} ")

    def test_distinct_emails(self):
        assert user_id_for("a@example.com") != user_id_for("b@example.com")


class TestLocalAuth:
    """
    **Feature: trade-journal, Property 27: Session Persistence**
    """

    def test_signed_out_by_default(self, session_path: Path):
        assert LocalAuth(session_path).current_user is None

    def test_sign_in_persists(self, session_path: Path):
        user = LocalAuth(session_path).sign_in("asha@example.com", "Asha Rao")

        restored = LocalAuth(session_path).current_user

        assert restored == user
        assert restored.name == "Asha Rao"

    def test_default_name_from_email(self, session_path: Path):
        user = LocalAuth(session_path).sign_in("trader@example.com")

        assert user.name == "trader"

    def test_sign_out_persists(self, session_path: Path):
        auth = LocalAuth(session_path)
        auth.sign_in("asha@example.com")

        auth.sign_out()

        assert LocalAuth(session_path).current_user is None

    def test_empty_email_rejected(self, session_path: Path):
        with pytest.raises(ValueError):
            LocalAuth(session_path).sign_in("   ")

    def test_corrupt_session_ignored(self, session_path: Path):
        session_path.write_text("not [valid toml")

        assert LocalAuth(session_path).current_user is None

    def test_listeners(self, session_path: Path):
        auth = LocalAuth(session_path)
        seen = []

        unsubscribe = auth.on_change(seen.append)
        user = auth.sign_in("asha@example.com")
        auth.sign_out()
        unsubscribe()
        auth.sign_in("asha@example.com")

        assert seen == [None, user, None]
