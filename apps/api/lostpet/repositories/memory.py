"""In-memory repositories used by the API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count
from uuid import uuid4


@dataclass(slots=True)
class UserRecord:
    id: int
    email: str
    password_hash: str
    name: str
    firstname: str
    created_at: datetime


@dataclass(slots=True)
class QRCodeRecord:
    id: int
    pet_id: int
    url: str
    base64: str
    created_at: datetime


@dataclass(slots=True)
class PetRecord:
    id: int
    owner_id: int
    name: str
    breed: str
    sexe: str
    birthdate: str
    slug: str
    created_at: datetime
    updated_at: datetime
    qr_code_id: int | None = None
    deleted_at: datetime | None = None


@dataclass(slots=True)
class ReportRecord:
    id: int
    pet_id: int
    phone_number: str
    city: str
    where: str
    has_pet: bool
    additional: str
    created_at: datetime


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer with integer primary keys."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    pets: dict[int, PetRecord] = field(default_factory=dict)
    qr_codes: dict[int, QRCodeRecord] = field(default_factory=dict)
    reports: dict[int, ReportRecord] = field(default_factory=dict)
    user_write_count: int = 0
    pet_write_count: int = 0
    report_write_count: int = 0
    _user_ids: count = field(default_factory=lambda: count(1))
    _pet_ids: count = field(default_factory=lambda: count(1))
    _qr_code_ids: count = field(default_factory=lambda: count(1))
    _report_ids: count = field(default_factory=lambda: count(1))

    def create_user(self, *, email: str, password_hash: str, name: str, firstname: str) -> UserRecord:
        user = UserRecord(
            id=next(self._user_ids),
            email=email,
            password_hash=password_hash,
            name=name,
            firstname=firstname,
            created_at=datetime.now(UTC),
        )
        self.users[user.id] = user
        self.user_write_count += 1
        return user

    def get_user(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        wanted = email.strip().lower()
        for user in self.users.values():
            if user.email.lower() == wanted:
                return user
        return None

    def create_pet(self, *, owner_id: int, name: str, breed: str, sexe: str, birthdate: str) -> PetRecord:
        now = datetime.now(UTC)
        pet = PetRecord(
            id=next(self._pet_ids),
            owner_id=owner_id,
            name=name,
            breed=breed,
            sexe=sexe,
            birthdate=birthdate,
            slug=str(uuid4()),
            created_at=now,
            updated_at=now,
        )
        self.pets[pet.id] = pet
        self.pet_write_count += 1
        return pet

    def get_pet(self, pet_id: int) -> PetRecord | None:
        pet = self.pets.get(pet_id)
        if pet is None or pet.deleted_at is not None:
            return None
        return pet

    def get_pet_by_slug(self, slug: str) -> PetRecord | None:
        for pet in self.pets.values():
            if pet.slug == slug and pet.deleted_at is None:
                return pet
        return None

    def get_pet_for_owner(self, *, owner_id: int, slug: str) -> PetRecord | None:
        pet = self.get_pet_by_slug(slug)
        if pet is None or pet.owner_id != owner_id:
            return None
        return pet

    def list_pets_for_owner(self, owner_id: int) -> list[PetRecord]:
        pets = [pet for pet in self.pets.values() if pet.owner_id == owner_id and pet.deleted_at is None]
        pets.sort(key=lambda record: record.id)
        return pets

    def update_pet(self, pet: PetRecord, *, name: str, breed: str, sexe: str, birthdate: str) -> PetRecord:
        pet.name = name
        pet.breed = breed
        pet.sexe = sexe
        pet.birthdate = birthdate
        pet.updated_at = datetime.now(UTC)
        self.pet_write_count += 1
        return pet

    def delete_pet(self, pet: PetRecord) -> None:
        """Soft delete: the record stays but every lookup skips it."""
        pet.deleted_at = datetime.now(UTC)
        self.pet_write_count += 1

    def create_qr_code(self, *, pet: PetRecord, url: str, base64: str) -> QRCodeRecord:
        qr_code = QRCodeRecord(
            id=next(self._qr_code_ids),
            pet_id=pet.id,
            url=url,
            base64=base64,
            created_at=datetime.now(UTC),
        )
        self.qr_codes[qr_code.id] = qr_code
        pet.qr_code_id = qr_code.id
        return qr_code

    def get_qr_code(self, qr_code_id: int | None) -> QRCodeRecord | None:
        if qr_code_id is None:
            return None
        return self.qr_codes.get(qr_code_id)

    def create_report(
        self,
        *,
        pet_id: int,
        phone_number: str,
        city: str,
        where: str,
        has_pet: bool,
        additional: str,
    ) -> ReportRecord:
        report = ReportRecord(
            id=next(self._report_ids),
            pet_id=pet_id,
            phone_number=phone_number,
            city=city,
            where=where,
            has_pet=has_pet,
            additional=additional,
            created_at=datetime.now(UTC),
        )
        self.reports[report.id] = report
        self.report_write_count += 1
        return report

    def list_reports_for_pet(self, pet_id: int) -> list[ReportRecord]:
        reports = [report for report in self.reports.values() if report.pet_id == pet_id]
        reports.sort(key=lambda record: record.created_at)
        return reports
