"""passlib adapter for the PasswordHasher port."""

from passlib.context import CryptContext

from backoffice.application.interfaces import PasswordHasher

# pbkdf2_sha256 is pure Python in passlib, so no native bcrypt build is needed
_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasslibPasswordHasher(PasswordHasher):
    def __init__(self, context: CryptContext = _context):
        self._context = context

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        return self._context.verify(password, password_hash)
