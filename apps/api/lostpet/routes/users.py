"""Owner account routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from lostpet.routes.dependencies import get_session_identity, get_user_service
from lostpet.schemas.auth import SessionToken, SignInRequest, SignUpRequest, VerifiedIdentity
from lostpet.schemas.error import DataResponse, ErrorResponse
from lostpet.schemas.user import User
from lostpet.services.users import UserService

router = APIRouter(tags=["Users"])


@router.post(
    "/signup",
    response_model=DataResponse[SessionToken],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def sign_up(
    payload: SignUpRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataResponse[SessionToken]:
    return DataResponse[SessionToken](data=service.sign_up(payload), status=status.HTTP_201_CREATED)


@router.post(
    "/signin",
    response_model=DataResponse[SessionToken],
    responses={400: {"model": ErrorResponse}},
)
async def sign_in(
    payload: SignInRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataResponse[SessionToken]:
    return DataResponse[SessionToken](data=service.sign_in(payload), status=status.HTTP_200_OK)


@router.get(
    "/user/me",
    response_model=DataResponse[User],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_current_user(
    identity: Annotated[VerifiedIdentity, Depends(get_session_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataResponse[User]:
    return DataResponse[User](data=service.get_user(user_id=identity.id), status=status.HTTP_200_OK)
