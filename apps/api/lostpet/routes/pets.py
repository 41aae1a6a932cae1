"""Owner pet routes; every handler is scoped to the session identity."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from lostpet.routes.dependencies import get_pet_service, get_session_identity
from lostpet.schemas.auth import VerifiedIdentity
from lostpet.schemas.error import DataResponse, ErrorResponse
from lostpet.schemas.pet import Pet, PetPayload, QRCode
from lostpet.schemas.report import Report
from lostpet.services.pets import PetService

_AUTH_RESPONSES = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}
_OWNED_RESPONSES = {**_AUTH_RESPONSES, 404: {"model": ErrorResponse}}

router = APIRouter(prefix="/pets", tags=["Pets"], responses=_AUTH_RESPONSES)

Identity = Annotated[VerifiedIdentity, Depends(get_session_identity)]
Service = Annotated[PetService, Depends(get_pet_service)]
Slug = Annotated[str, Path()]


@router.post(
    "",
    response_model=DataResponse[Pet],
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_pet(payload: PetPayload, identity: Identity, service: Service) -> DataResponse[Pet]:
    pet = service.create_pet(owner_id=identity.id, payload=payload)
    return DataResponse[Pet](data=pet, status=status.HTTP_201_CREATED)


@router.get("", response_model=DataResponse[list[Pet]])
async def list_pets(identity: Identity, service: Service) -> DataResponse[list[Pet]]:
    return DataResponse[list[Pet]](data=service.list_pets(owner_id=identity.id), status=status.HTTP_200_OK)


@router.get("/{slug}", response_model=DataResponse[Pet], responses=_OWNED_RESPONSES)
async def get_pet(slug: Slug, identity: Identity, service: Service) -> DataResponse[Pet]:
    return DataResponse[Pet](data=service.get_pet(owner_id=identity.id, slug=slug), status=status.HTTP_200_OK)


@router.put(
    "/{slug}",
    response_model=DataResponse[Pet],
    responses={**_OWNED_RESPONSES, 422: {"model": ErrorResponse}},
)
async def update_pet(slug: Slug, payload: PetPayload, identity: Identity, service: Service) -> DataResponse[Pet]:
    pet = service.update_pet(owner_id=identity.id, slug=slug, payload=payload)
    return DataResponse[Pet](data=pet, status=status.HTTP_200_OK)


@router.delete("/{slug}", response_model=DataResponse[str], responses=_OWNED_RESPONSES)
async def delete_pet(slug: Slug, identity: Identity, service: Service) -> DataResponse[str]:
    message = service.delete_pet(owner_id=identity.id, slug=slug)
    return DataResponse[str](data=message, status=status.HTTP_200_OK)


@router.get("/{slug}/qrcode", response_model=DataResponse[QRCode], responses=_OWNED_RESPONSES)
async def get_pet_qr_code(slug: Slug, identity: Identity, service: Service) -> DataResponse[QRCode]:
    qr_code = service.get_qr_code(owner_id=identity.id, slug=slug)
    return DataResponse[QRCode](data=qr_code, status=status.HTTP_200_OK)


@router.get("/{slug}/reports", response_model=DataResponse[list[Report]], responses=_OWNED_RESPONSES)
async def list_pet_reports(slug: Slug, identity: Identity, service: Service) -> DataResponse[list[Report]]:
    reports = service.list_reports(owner_id=identity.id, slug=slug)
    return DataResponse[list[Report]](data=reports, status=status.HTTP_200_OK)
