from passlib.context import CryptContext

# argon2 verification is constant-time with respect to the supplied password
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# Hashed once so a login for an unknown email costs the same as a wrong password
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        pwd_context.verify(plain, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain, hashed)
