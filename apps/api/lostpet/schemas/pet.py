"""Pet API schemas."""

from datetime import datetime

from pydantic import BaseModel


class PetPayload(BaseModel):
    """Create/update body; field rules are enforced by the pet service."""

    name: str = ""
    breed: str = ""
    sexe: str = ""
    birthdate: str = ""


class QRCode(BaseModel):
    url: str
    base64: str


class Pet(BaseModel):
    id: int
    name: str
    breed: str
    sexe: str
    birthdate: str
    slug: str
    user_id: int
    qrcode: QRCode | None = None
    created_at: datetime
    updated_at: datetime


class PublicPet(BaseModel):
    name: str
    breed: str
    sexe: str
    birthdate: str
    slug: str
    qrcode: QRCode | None = None


class PublicPetPage(BaseModel):
    token: str
    pet: PublicPet
