"""Binds a report token to the pet addressed by the request path."""

from __future__ import annotations

import logging

from lostpet.adapters.auth.base import ScopeMismatchError
from lostpet.core.logging_safety import safe_log_identifier
from lostpet.repositories.memory import InMemoryStore, PetRecord
from lostpet.schemas.auth import VerifiedIdentity

logger = logging.getLogger(__name__)


class ReportScopeBinder:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def check_scope(self, identity: VerifiedIdentity, requested_slug: str) -> PetRecord:
        """Return the pet the token was minted for, if and only if it is the one requested."""
        if identity.kind != "report":
            raise ScopeMismatchError("Token is not a report token")

        pet = self._store.get_pet(identity.id)
        if pet is None or pet.slug != requested_slug:
            logger.warning(
                "report.scope_mismatch pet=%s requested_slug=%s",
                safe_log_identifier(identity.id, prefix="pet"),
                safe_log_identifier(requested_slug, prefix="slug"),
            )
            raise ScopeMismatchError("Token was not issued for this pet")
        return pet


__all__ = ["ReportScopeBinder"]
