import hashlib
import secrets

CODE_LENGTH = 6


def generate_verification_code(length: int = CODE_LENGTH) -> str:
    """Random numeric code; repdigits such as 000000 or 777777 are rejected."""
    while True:
        code = "".join(secrets.choice("0123456789") for _ in range(length))
        if len(set(code)) > 1:
            return code


def code_digest(code: str) -> str:
    return hashlib.sha1(code.encode("utf-8")).hexdigest()
