from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from usermanagement.api import deps
from usermanagement.core.errors import ConflictError, UserNotFoundError, ValidationFailedError
from usermanagement.models.user import USER_ID_MAX, USER_ID_MIN
from usermanagement.schemas.user import UserCreate, UserRead, UserUpdate
from usermanagement.services.user import (
    create_user,
    delete_user,
    get_user_or_404,
    list_users,
    update_user,
)

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[int, Path(ge=USER_ID_MIN, le=USER_ID_MAX, description="64-bit user id")]


def _validation_response(exc: ValidationFailedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": [e.as_dict() for e in exc.fields]},
    )


def _conflict_response(exc: ConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "field": exc.field},
    )


def _not_found_response(exc: UserNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "User not found"})


@router.get("", response_model=list[UserRead], summary="List users",
            description="List all users ordered by id.")
async def list_users_route(session: AsyncSession = Depends(deps.get_db)):
    return await deps.with_deadline(list_users(session))


@router.get("/{user_id}", response_model=UserRead, summary="Get a user",
            responses={404: {"description": "User not found"}})
async def get_user_route(user_id: UserId, session: AsyncSession = Depends(deps.get_db)):
    try:
        return await deps.with_deadline(get_user_or_404(session, user_id))
    except UserNotFoundError as exc:
        return _not_found_response(exc)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED,
             summary="Create a user",
             description="Create a new user. userName and email must be unique.",
             responses={409: {"description": "userName or email already taken"},
                        422: {"description": "Field validation failed"}})
async def create_user_route(payload: UserCreate, session: AsyncSession = Depends(deps.get_db)):
    try:
        return await deps.with_deadline(create_user(session, payload))
    except ValidationFailedError as exc:
        return _validation_response(exc)
    except ConflictError as exc:
        return _conflict_response(exc)


@router.put("/{user_id}", response_model=UserRead,
            summary="Update a user",
            description="Replace every field of an existing user.",
            responses={404: {"description": "User not found"},
                       409: {"description": "userName or email already taken"},
                       422: {"description": "Field validation failed"}})
async def update_user_route(
    user_id: UserId,
    payload: UserUpdate,
    session: AsyncSession = Depends(deps.get_db),
):
    try:
        return await deps.with_deadline(update_user(session, user_id, payload))
    except UserNotFoundError as exc:
        return _not_found_response(exc)
    except ValidationFailedError as exc:
        return _validation_response(exc)
    except ConflictError as exc:
        return _conflict_response(exc)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete a user",
               description="Delete a user by id. Deleting an unknown id also succeeds.")
async def delete_user_route(user_id: UserId, session: AsyncSession = Depends(deps.get_db)):
    await deps.with_deadline(delete_user(session, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
