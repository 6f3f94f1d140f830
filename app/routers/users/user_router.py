from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from app.schemas.users.user_schemas import (
    MessageResponse,
    UserCreatedOut,
    UserLogsOut,
    UpdateResultOut,
)
from app.services.users.user_services import UserService
from app.utils.get_user import get_bearer_token, get_current_user_id, get_user_service
from app.utils.logger import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger(__name__)


@router.get("/logs", response_model=UserLogsOut)
async def get_all_logs_api(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    logger.info("List logs request", extra={"user_id": user_id})
    return await service.get_all_logs(user_id)


@router.post("", response_model=UserCreatedOut, status_code=status.HTTP_201_CREATED)
async def create_user_api(
    body: Any = Body(...),
    service: UserService = Depends(get_user_service),
):
    logger.info("Create user request")
    return await service.create(body)


@router.patch("", response_model=UpdateResultOut)
async def update_user_api(
    body: Any = Body(...),
    token: str = Depends(get_bearer_token),
    service: UserService = Depends(get_user_service),
):
    logger.info("Update user request")
    result = await service.update(token, body)

    if result.status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return JSONResponse(
        status_code=result.status_code,
        content=UpdateResultOut(
            message=result.message,
            updated=result.updated,
            rejected=result.rejected,
        ).model_dump(),
    )


@router.delete("", response_model=MessageResponse)
async def delete_user_api(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    logger.info("Soft delete request", extra={"user_id": user_id})
    return MessageResponse(message=await service.delete(user_id))


@router.delete("/hard", response_model=MessageResponse)
async def hard_delete_user_api(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    logger.info("Hard delete request", extra={"user_id": user_id})
    return MessageResponse(message=await service.hard_delete(user_id))


@router.post("/restore", response_model=MessageResponse)
async def restore_user_api(
    token: str = Depends(get_bearer_token),
    service: UserService = Depends(get_user_service),
):
    logger.info("Restore user request")
    return MessageResponse(message=await service.restore(token))
