"""Password hashing for owner accounts."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hashes; ``rounds`` is the log2 cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, encoded: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            return False


__all__ = ["DEFAULT_ROUNDS", "MAX_PASSWORD_BYTES", "PasswordHasher"]
