"""Anonymous finder routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from lostpet.repositories.memory import PetRecord
from lostpet.routes.dependencies import get_pet_service, get_report_service, get_request_id, get_scoped_pet
from lostpet.schemas.error import DataResponse, ErrorResponse
from lostpet.schemas.pet import PublicPetPage
from lostpet.schemas.report import CreateReportRequest, Report
from lostpet.services.pets import PetService
from lostpet.services.reports import ReportService

router = APIRouter(prefix="/pet", tags=["Public"])


@router.get(
    "/{slug}",
    response_model=DataResponse[PublicPetPage],
    responses={404: {"model": ErrorResponse}},
)
async def get_public_pet(
    slug: Annotated[str, Path()],
    service: Annotated[PetService, Depends(get_pet_service)],
) -> DataResponse[PublicPetPage]:
    return DataResponse[PublicPetPage](data=service.get_public_page(slug=slug), status=status.HTTP_200_OK)


@router.post(
    "/{slug}/report",
    response_model=DataResponse[Report],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_report(
    payload: CreateReportRequest,
    pet: Annotated[PetRecord, Depends(get_scoped_pet)],
    request_id: Annotated[str, Depends(get_request_id)],
    service: Annotated[ReportService, Depends(get_report_service)],
) -> DataResponse[Report]:
    report = service.create_report(pet=pet, payload=payload, request_id=request_id)
    return DataResponse[Report](data=report, status=status.HTTP_201_CREATED)
