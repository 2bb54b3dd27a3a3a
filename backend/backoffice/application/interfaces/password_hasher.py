"""Abstract password hasher, the port for credential hashing adapters."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port that hashes and verifies admin passwords."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...
