import pytest

from src.app.use_cases.auth.otp import code_digest, generate_verification_code
from src.domain import rules
from src.domain.entities import InvalidTransition, User, UserStatus


@pytest.mark.parametrize(
    "email, masked",
    [
        ("member42@exzly.dev", "mem***42@exzly.dev"),
        ("alice@b.com", "ali**@b.com"),
        ("al@b.com", "al@b.com"),
        ("user2024@mail.io", "use*2024@mail.io"),
    ],
)
def test_mask_email(email, masked):
    assert rules.mask_email(email) == masked


@pytest.mark.parametrize("username", ["a", "a.b", "john_doe", "x1.y2_z3", "a" * 30])
def test_valid_usernames(username):
    assert rules.is_valid_username(username)


@pytest.mark.parametrize("username", ["", ".ab", "ab.", "a..b", "a__b", "a b", "a" * 31, "a@b"])
def test_invalid_usernames(username):
    assert not rules.is_valid_username(username)


def test_ownership_rule():
    assert rules.can_act_on(actor_id=1, actor_is_admin=True, owner_id=2)
    assert rules.can_act_on(actor_id=2, actor_is_admin=False, owner_id=2)
    assert not rules.can_act_on(actor_id=3, actor_is_admin=False, owner_id=2)


def test_verification_code_is_never_a_repdigit():
    for _ in range(200):
        code = generate_verification_code()
        assert len(code) == 6 and code.isdigit()
        assert len(set(code)) > 1


def test_code_digest_is_sha1_hex():
    assert code_digest("123456") == "7c4a8d09ca3762af61e59520943dc26494f8941b"


def test_user_lifecycle_transitions():
    user = User(email="a@b.com", username="ab", password_hash="x", full_name="Ab")

    with pytest.raises(InvalidTransition):
        user.transition(UserStatus.purged)

    user.transition(UserStatus.trashed)
    assert not user.is_active
    user.transition(UserStatus.active)
    assert user.deleted_at is None

    user.transition(UserStatus.trashed)
    user.transition(UserStatus.purged)
    with pytest.raises(InvalidTransition):
        user.transition(UserStatus.active)
