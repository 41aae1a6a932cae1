"""Pet service layer."""

import logging
from uuid import UUID

from lostpet.adapters.auth import TokenCodec
from lostpet.core.logging_safety import safe_log_identifier
from lostpet.core.qr import public_pet_url, render_qr_code
from lostpet.errors import ApiError, FieldValidationError, NotFoundError
from lostpet.repositories.memory import InMemoryStore, PetRecord
from lostpet.schemas.error import FieldError
from lostpet.schemas.pet import Pet, PetPayload, PublicPet, PublicPetPage, QRCode
from lostpet.schemas.report import Report
from lostpet.services.reports import report_from_record

logger = logging.getLogger(__name__)

_SEXES = frozenset({"male", "female"})
_NAME_MAX_LENGTH = 30
_BIRTHDATE_MAX_LENGTH = 12


def validate_pet_payload(payload: PetPayload) -> list[FieldError]:
    errors: list[FieldError] = []
    if not payload.name.strip():
        errors.append(FieldError(field="name", error="Name is required"))
    elif len(payload.name) > _NAME_MAX_LENGTH:
        errors.append(FieldError(field="name", error=f"Name must be at most {_NAME_MAX_LENGTH} characters"))
    if not payload.breed.strip():
        errors.append(FieldError(field="breed", error="Breed is required"))
    if payload.sexe not in _SEXES:
        errors.append(FieldError(field="sexe", error="Is it a male or a female?"))
    if not payload.birthdate.strip():
        errors.append(FieldError(field="birthdate", error="Birthdate is required"))
    elif len(payload.birthdate) > _BIRTHDATE_MAX_LENGTH:
        errors.append(FieldError(field="birthdate", error="Birthdate looks invalid"))
    return errors


def ensure_valid_slug(slug: str) -> None:
    try:
        UUID(slug)
    except ValueError as exc:
        raise ApiError(status_code=400, field="slug", message="Your pet identifier looks invalid") from exc


class PetService:
    def __init__(self, store: InMemoryStore, codec: TokenCodec, frontend_url: str) -> None:
        self._store = store
        self._codec = codec
        self._frontend_url = frontend_url

    def create_pet(self, *, owner_id: int, payload: PetPayload) -> Pet:
        errors = validate_pet_payload(payload)
        if errors:
            raise FieldValidationError(errors)

        record = self._store.create_pet(
            owner_id=owner_id,
            name=payload.name,
            breed=payload.breed,
            sexe=payload.sexe,
            birthdate=payload.birthdate,
        )
        url = public_pet_url(self._frontend_url, record.slug)
        self._store.create_qr_code(pet=record, url=url, base64=render_qr_code(url))
        logger.info(
            "pet.created owner=%s pet=%s",
            safe_log_identifier(owner_id, prefix="uid"),
            safe_log_identifier(record.id, prefix="pet"),
        )
        return self._to_pet(record)

    def list_pets(self, *, owner_id: int) -> list[Pet]:
        return [self._to_pet(record) for record in self._store.list_pets_for_owner(owner_id)]

    def get_pet(self, *, owner_id: int, slug: str) -> Pet:
        return self._to_pet(self._owned_pet(owner_id=owner_id, slug=slug))

    def update_pet(self, *, owner_id: int, slug: str, payload: PetPayload) -> Pet:
        ensure_valid_slug(slug)
        errors = validate_pet_payload(payload)
        if errors:
            raise FieldValidationError(errors)

        record = self._owned_pet(owner_id=owner_id, slug=slug)
        self._store.update_pet(
            record,
            name=payload.name,
            breed=payload.breed,
            sexe=payload.sexe,
            birthdate=payload.birthdate,
        )
        return self._to_pet(record)

    def delete_pet(self, *, owner_id: int, slug: str) -> str:
        record = self._owned_pet(owner_id=owner_id, slug=slug)
        self._store.delete_pet(record)
        logger.info(
            "pet.deleted owner=%s pet=%s",
            safe_log_identifier(owner_id, prefix="uid"),
            safe_log_identifier(record.id, prefix="pet"),
        )
        return "The record has been deleted"

    def get_qr_code(self, *, owner_id: int, slug: str) -> QRCode:
        record = self._owned_pet(owner_id=owner_id, slug=slug)
        qr_code = self._store.get_qr_code(record.qr_code_id)
        if qr_code is None:
            raise NotFoundError()
        return QRCode(url=qr_code.url, base64=qr_code.base64)

    def list_reports(self, *, owner_id: int, slug: str) -> list[Report]:
        record = self._owned_pet(owner_id=owner_id, slug=slug)
        return [report_from_record(report) for report in self._store.list_reports_for_pet(record.id)]

    def get_public_page(self, *, slug: str) -> PublicPetPage:
        """Public lookup; hands the finder a report token scoped to this pet only."""
        record = self._store.get_pet_by_slug(slug)
        if record is None:
            raise NotFoundError()

        pet = self._to_pet(record)
        return PublicPetPage(
            token=self._codec.issue_report_token(record.id),
            pet=PublicPet(
                name=pet.name,
                breed=pet.breed,
                sexe=pet.sexe,
                birthdate=pet.birthdate,
                slug=pet.slug,
                qrcode=pet.qrcode,
            ),
        )

    def _owned_pet(self, *, owner_id: int, slug: str) -> PetRecord:
        ensure_valid_slug(slug)
        record = self._store.get_pet_for_owner(owner_id=owner_id, slug=slug)
        if record is None:
            raise NotFoundError()
        return record

    def _to_pet(self, record: PetRecord) -> Pet:
        qr_code = self._store.get_qr_code(record.qr_code_id)
        return Pet(
            id=record.id,
            name=record.name,
            breed=record.breed,
            sexe=record.sexe,
            birthdate=record.birthdate,
            slug=record.slug,
            user_id=record.owner_id,
            qrcode=QRCode(url=qr_code.url, base64=qr_code.base64) if qr_code is not None else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
