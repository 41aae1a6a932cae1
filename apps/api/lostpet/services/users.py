"""Owner account service layer."""

import logging

from lostpet.adapters.auth import TokenCodec
from lostpet.core.logging_safety import mask_email, safe_log_identifier
from lostpet.core.passwords import PasswordHasher
from lostpet.errors import ConflictError, InvalidCredentialsError, NotFoundError
from lostpet.repositories.memory import InMemoryStore
from lostpet.schemas.auth import SessionToken, SignInRequest, SignUpRequest
from lostpet.schemas.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: InMemoryStore, codec: TokenCodec, hasher: PasswordHasher) -> None:
        self._store = store
        self._codec = codec
        self._hasher = hasher

    def sign_up(self, payload: SignUpRequest) -> SessionToken:
        email = payload.email.strip()
        if self._store.get_user_by_email(email) is not None:
            raise ConflictError(field="email", message="An account already exists for this email")

        record = self._store.create_user(
            email=email,
            password_hash=self._hasher.hash(payload.password),
            name=payload.name,
            firstname=payload.firstname,
        )
        logger.info(
            "user.signed_up user=%s email=%s",
            safe_log_identifier(record.id, prefix="uid"),
            mask_email(record.email),
        )
        return SessionToken(email=record.email, token=self._codec.issue_session_token(record.id, record.email))

    def sign_in(self, payload: SignInRequest) -> SessionToken:
        record = self._store.get_user_by_email(payload.email)
        if record is None:
            logger.debug("user.sign_in_rejected email=%s reason=unknown_email", mask_email(payload.email))
            raise InvalidCredentialsError()
        if not self._hasher.verify(payload.password, record.password_hash):
            logger.debug("user.sign_in_rejected email=%s reason=wrong_password", mask_email(payload.email))
            raise InvalidCredentialsError()

        return SessionToken(email=record.email, token=self._codec.issue_session_token(record.id, record.email))

    def get_user(self, *, user_id: int) -> User:
        record = self._store.get_user(user_id)
        if record is None:
            raise NotFoundError()
        return User(id=record.id, email=record.email, name=record.name, firstname=record.firstname)
