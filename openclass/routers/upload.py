# openclass/routers/upload.py
from typing import List
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..core.rate_limiter import check_rate_limit
from ..models.user import User
from ..services.upload_service import UploadService
from ..utils.responses import error_responses, success_response

router = APIRouter(prefix="/api/upload", tags=["Upload"], responses=error_responses(400, 401, 403, 404, 429))


def get_upload_service(request: Request, db: AsyncSession = Depends(get_db)) -> UploadService:
    return UploadService(db, request.app.state.settings)


@router.post("/single", status_code=status.HTTP_201_CREATED, dependencies=[Depends(check_rate_limit)])
async def upload_single(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    uploaded = await service.upload(current_user, file)
    return success_response(uploaded, "File uploaded successfully")


@router.post("/multiple", status_code=status.HTTP_201_CREATED, dependencies=[Depends(check_rate_limit)])
async def upload_multiple(
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    uploaded = await service.upload_many(current_user, files)
    return success_response(uploaded, f"{len(uploaded)} files uploaded successfully")


@router.delete("/{public_id:path}", dependencies=[Depends(check_rate_limit)])
async def delete_upload(
    public_id: str,
    current_user: User = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    await service.delete(current_user, public_id)
    return success_response(message="File deleted successfully")
