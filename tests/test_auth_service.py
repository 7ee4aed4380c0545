import pytest

from core import auth_service
from core.auth_service import (
    authenticate_user,
    create_user,
    create_user_from_google,
    get_user_by_email,
    update_contact_details,
)
from core.config import Settings
from core.google_auth import get_google_user_info, revoke_google_auth
from core.user_service import create_default_admin, promote_to_admin


@pytest.fixture(autouse=True)
def reset_lockout():
    auth_service._failed_attempts.clear()
    yield
    auth_service._failed_attempts.clear()


def test_register_and_login(db):
    user = create_user(db, " Dana ", "Dana@Example.com", "secret1", phone_number="0912")
    assert user.email == "dana@example.com"
    assert user.full_name == "Dana"
    assert user.role == "user"
    assert user.password_hash != "secret1"

    logged_in, message = authenticate_user(db, "DANA@example.com", "secret1")
    assert logged_in.id == user.id
    assert message == "Login successful."


def test_duplicate_email_rejected(db):
    assert create_user(db, "Dana", "dana@example.com", "secret1")
    assert create_user(db, "Other Dana", "DANA@example.com", "secret2") is None


def test_lockout_after_three_failures(db):
    create_user(db, "Eve", "eve@example.com", "right-pw")

    assert authenticate_user(db, "eve@example.com", "wrong")[1] == "Invalid credentials. 2 attempts left."
    assert authenticate_user(db, "eve@example.com", "wrong")[1] == "Invalid credentials. 1 attempts left."
    assert authenticate_user(db, "eve@example.com", "wrong")[1] == "Account locked due to too many failed attempts."

    user, message = authenticate_user(db, "eve@example.com", "right-pw")
    assert user is None
    assert message.startswith("Account locked.")


def test_expired_lockout_starts_a_fresh_count(db, monkeypatch):
    create_user(db, "Eve", "eve@example.com", "right-pw")
    clock = {"now": 1000.0}
    monkeypatch.setattr(auth_service.time, "time", lambda: clock["now"])

    for _ in range(3):
        authenticate_user(db, "eve@example.com", "wrong")
    assert authenticate_user(db, "eve@example.com", "right-pw")[0] is None

    clock["now"] += auth_service.LOCKOUT_TIME
    user, message = authenticate_user(db, "eve@example.com", "wrong")
    assert user is None
    assert message == "Invalid credentials. 2 attempts left."

    user, message = authenticate_user(db, "eve@example.com", "right-pw")
    assert user is not None
    assert message == "Login successful."


def test_google_user_created_once(db):
    first = create_user_from_google(db, "Gina@Gmail.com", "Gina", picture="http://pic", google_id="123")
    again = create_user_from_google(db, "gina@gmail.com", "Gina G")
    assert first.id == again.id
    assert first.auth_provider == "google"
    assert first.google_id == "123"


def test_update_contact_details(db, customer):
    assert update_contact_details(db, customer.id, " 0912 ", " 5 Elm St ")
    assert customer.phone_number == "0912"
    assert customer.delivery_address == "5 Elm St"
    assert not update_contact_details(db, 999, "1", "2")


def test_default_admin_is_idempotent(db):
    settings = Settings(admin_email="Boss@BigBite.com", admin_password="pw123")
    admin = create_default_admin(db, settings)
    assert admin.is_admin
    assert admin.email == "boss@bigbite.com"
    assert create_default_admin(db, settings).id == admin.id
    assert authenticate_user(db, "boss@bigbite.com", "pw123")[0].id == admin.id


def test_promote_existing_and_new(db, customer):
    user, created = promote_to_admin(db, customer.email)
    assert not created and user.id == customer.id and user.is_admin

    user, created = promote_to_admin(db, "new-admin@bigbite.com", "pw456")
    assert created and user.is_admin
    assert get_user_by_email(db, "new-admin@bigbite.com").role == "admin"


def test_google_sign_in_without_client_secrets(tmp_path):
    settings = Settings(google_client_secrets_file=str(tmp_path / "missing.json"),
                        google_token_file=str(tmp_path / "token.json"))
    assert get_google_user_info(settings) is None


def test_revoke_google_auth_removes_token(tmp_path):
    token = tmp_path / "token.json"
    token.write_bytes(b"cached")
    revoke_google_auth(Settings(google_token_file=str(token)))
    assert not token.exists()
    # Nothing to revoke is fine too
    revoke_google_auth(Settings(google_token_file=str(token)))
