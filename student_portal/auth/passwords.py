"""Password hashing for user registration and login.

Hashes are salted pbkdf2_sha256 with a fixed round count, so two hashes of
the same password never compare equal.
"""
from passlib.context import CryptContext

HASH_ROUNDS = 29000

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=HASH_ROUNDS,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> bool:
    # Burns the same work as verify_password so an unknown email is not
    # distinguishable from a wrong password by response time.
    return pwd_context.dummy_verify()
