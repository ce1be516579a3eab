"""
Account rules shared by request validation and use cases.
"""

import re

FULL_NAME_MIN = 2
FULL_NAME_MAX = 80
PASSWORD_MIN = 6
PASSWORD_MAX = 72  # bcrypt only reads the first 72 bytes
USERNAME_MAX = 30

# Letters and digits, joined by single "." or "_" separators, 1-30 chars
USERNAME_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9]|[a-zA-Z0-9](?!.*?[._]{2})[a-zA-Z0-9._]{0,28}[a-zA-Z0-9])$"
)
USERNAME_FORMAT_MESSAGE = (
    'Username format is invalid. Use letters, numbers, "_", or ".", '
    'and avoid consecutive symbols like ".." or "__"'
)


def is_valid_username(value: str) -> bool:
    return bool(USERNAME_PATTERN.match(value))


def normalize_identity(value: str) -> str:
    """Emails and usernames are compared case-folded."""
    return value.strip().lower()


def can_act_on(actor_id: int, actor_is_admin: bool, owner_id: int) -> bool:
    """Admins act on anyone; everybody else only on themselves."""
    return actor_is_admin or actor_id == owner_id


def mask_email(email: str, visible: int = 3) -> str:
    """
    Hide all but the first ``visible`` characters of the local part.

    A trailing run of digits in the local part is kept readable, so
    ``member42@exzly.dev`` becomes ``mem***42@exzly.dev``.
    """
    local_part, _, domain = email.partition("@")
    digits = re.search(r"\d+$", local_part)

    if digits:
        suffix = digits.group(0)
        head = local_part[: len(local_part) - len(suffix)]
        masked = head[:visible] + "*" * max(len(head) - visible, 0) + suffix
    else:
        masked = local_part[:visible] + "*" * max(len(local_part) - visible, 0)

    return f"{masked}@{domain}"
