from datetime import datetime, timedelta

import pytest

from core import auth_service
from core.auth_service import (
    RESET_CODE_MINUTES,
    authenticate_user,
    create_reset_code,
    create_user,
    create_user_from_google,
    request_password_reset,
    reset_password,
    verify_reset_code,
)
from models.audit_log import AuditLog
from models.password_reset import PasswordReset

INVALID_CODE = "Invalid or expired reset code. Please request a new one."


class FakeMailer:
    def __init__(self, result=True):
        self.result = result
        self.sent = []

    def send_password_reset(self, to_email, code, full_name=""):
        self.sent.append((to_email, code, full_name))
        return self.result


@pytest.fixture(autouse=True)
def reset_lockout():
    auth_service._failed_attempts.clear()
    yield
    auth_service._failed_attempts.clear()


@pytest.fixture
def dana(db):
    return create_user(db, "Dana", "dana@example.com", "secret1")


@pytest.fixture
def mailer():
    return FakeMailer()


def test_emailed_code_resets_password(db, dana, mailer):
    assert request_password_reset(db, mailer, "DANA@example.com") is True
    to_email, code, name = mailer.sent[0]
    assert (to_email, name) == ("dana@example.com", "Dana")
    assert len(code) == 6 and code.isdigit()

    assert verify_reset_code(db, "dana@example.com", code)
    ok, message = reset_password(db, "dana@example.com", code, "newpass1")
    assert ok
    assert message == "Password has been reset. You can now log in with your new password."

    assert authenticate_user(db, "dana@example.com", "secret1")[0] is None
    user, _ = authenticate_user(db, "dana@example.com", "newpass1")
    assert user.id == dana.id
    assert db.query(AuditLog).filter(AuditLog.action == "Reset password with emailed code").count() == 1


def test_only_the_digest_is_stored(db, dana):
    _, code = create_reset_code(db, "dana@example.com")
    record = db.query(PasswordReset).one()
    assert record.code_hash != code
    assert len(record.code_hash) == 64


def test_code_works_once(db, dana):
    _, code = create_reset_code(db, "dana@example.com")
    assert reset_password(db, "dana@example.com", code, "newpass1")[0]

    assert reset_password(db, "dana@example.com", code, "another1") == (False, INVALID_CODE)
    assert db.query(PasswordReset).count() == 0


def test_expired_code_is_rejected_and_removed(db, dana):
    issued = datetime(2024, 5, 1, 12, 0)
    _, code = create_reset_code(db, "dana@example.com", now=issued)

    later = issued + timedelta(minutes=RESET_CODE_MINUTES)
    assert verify_reset_code(db, "dana@example.com", code, now=later - timedelta(seconds=1))
    assert reset_password(db, "dana@example.com", code, "newpass1", now=later) == (False, INVALID_CODE)
    assert db.query(PasswordReset).count() == 0


def test_wrong_code_or_email(db, dana):
    _, code = create_reset_code(db, "dana@example.com")
    wrong = "000000" if code != "000000" else "111111"

    assert not verify_reset_code(db, "dana@example.com", wrong)
    assert reset_password(db, "dana@example.com", wrong, "newpass1") == (False, INVALID_CODE)
    assert reset_password(db, "someone@example.com", code, "newpass1") == (False, INVALID_CODE)
    # The right code still works afterwards
    assert reset_password(db, "dana@example.com", code, "newpass1")[0]


def test_short_password_keeps_the_code(db, dana):
    _, code = create_reset_code(db, "dana@example.com")
    assert reset_password(db, "dana@example.com", code, "abc") == (
        False, "Password must be at least 6 characters long")
    assert verify_reset_code(db, "dana@example.com", code)


def test_newer_code_replaces_older(db, dana):
    _, first = create_reset_code(db, "dana@example.com")
    _, second = create_reset_code(db, "dana@example.com")

    assert db.query(PasswordReset).count() == 1
    if first != second:
        assert not verify_reset_code(db, "dana@example.com", first)
    assert verify_reset_code(db, "dana@example.com", second)


def test_no_code_for_unknown_or_google_accounts(db, mailer):
    create_user_from_google(db, "gina@gmail.com", "Gina", google_id="g-1")

    assert create_reset_code(db, "nobody@example.com") == (None, None)
    assert request_password_reset(db, mailer, "gina@gmail.com") is False
    assert mailer.sent == []
    assert db.query(PasswordReset).count() == 0


def test_failed_email_is_reported(db, dana):
    assert request_password_reset(db, FakeMailer(result=False), "dana@example.com") is False


def test_reset_clears_login_lockout(db, dana):
    for _ in range(3):
        authenticate_user(db, "dana@example.com", "wrong")
    assert authenticate_user(db, "dana@example.com", "secret1")[1].startswith("Account locked")

    _, code = create_reset_code(db, "dana@example.com")
    assert reset_password(db, "dana@example.com", code, "newpass1")[0]
    assert authenticate_user(db, "dana@example.com", "newpass1")[1] == "Login successful."
