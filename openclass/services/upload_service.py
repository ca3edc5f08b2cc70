# openclass/services/upload_service.py
"""File uploads kept on local disk.

Each stored file gets a ``public_id`` of the form ``openclass/<hex>``; the
bytes live at ``<upload_dir>/<public_id>.<ext>`` and are served under
``<upload_base_url>/<public_id>.<ext>``.
"""
from pathlib import Path
from typing import List, Optional, Tuple
import json
import logging
import mimetypes
import uuid

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ..core.config import Settings
from ..core.exceptions import authorization_error, not_found_error, validation_error
from ..models.file import File
from ..models.user import User
from ..schemas.file import UploadedFile

logger = logging.getLogger(__name__)

PUBLIC_ID_PREFIX = "openclass"

_TYPE_BY_MIME_PREFIX = {
    "image/": "IMAGE",
    "video/": "VIDEO",
    "audio/": "AUDIO",
}
_DOCUMENT_FORMATS = {"pdf", "doc", "docx", "ppt", "pptx", "txt", "md"}


def file_type_for(mime_type: Optional[str], extension: str) -> str:
    for prefix, file_type in _TYPE_BY_MIME_PREFIX.items():
        if mime_type and mime_type.startswith(prefix):
            return file_type
    if extension in _DOCUMENT_FORMATS:
        return "DOCUMENT"
    return "OTHER"


class LocalStorage:
    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def path_for(self, public_id: str, extension: str) -> Path:
        return self.root / f"{public_id}.{extension}"

    def url_for(self, public_id: str, extension: str) -> str:
        return f"{self.base_url}/{public_id}.{extension}"

    def _write(self, path: Path, content: bytes):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def save(self, public_id: str, extension: str, content: bytes) -> str:
        await run_in_threadpool(self._write, self.path_for(public_id, extension), content)
        return self.url_for(public_id, extension)

    async def remove(self, public_id: str, extension: str) -> bool:
        path = self.path_for(public_id, extension)
        if not path.exists():
            return False
        await run_in_threadpool(path.unlink)
        return True


class UploadService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.storage = LocalStorage(settings.upload_dir, settings.upload_base_url)

    def _validate(self, filename: str, size: int) -> str:
        extension = Path(filename).suffix.lower().lstrip(".")
        if extension not in self.settings.allowed_upload_extensions:
            raise validation_error(
                f"File type '.{extension}' is not allowed" if extension else "File has no extension",
                details=[{"field": "file", "message": "unsupported file type"}],
            )
        if size == 0:
            raise validation_error("Uploaded file is empty", details=[{"field": "file", "message": "empty file"}])
        if size > self.settings.max_upload_size:
            raise validation_error(
                f"File exceeds the {self.settings.max_upload_size} byte limit",
                details=[{"field": "file", "message": "file too large"}],
            )
        return extension

    async def _read(self, upload: UploadFile) -> Tuple[UploadFile, str, bytes]:
        """Validate one upload, reading no more than one byte past the size cap."""
        filename = upload.filename or ""
        limit = self.settings.max_upload_size
        if upload.size is not None and upload.size > limit:
            self._validate(filename, upload.size)
        content = await upload.read(limit + 1)
        extension = self._validate(filename, len(content))
        return upload, extension, content

    async def _store(self, user: User, pending: List[Tuple[UploadFile, str, bytes]]) -> List[UploadedFile]:
        """Write every file, then commit their rows together."""
        saved = []
        uploaded = []
        try:
            for upload, extension, content in pending:
                filename = upload.filename or ""
                public_id = f"{PUBLIC_ID_PREFIX}/{uuid.uuid4().hex}"
                url = await self.storage.save(public_id, extension, content)
                saved.append((public_id, extension))
                mime_type = upload.content_type or mimetypes.guess_type(filename)[0]

                self.db.add(File(
                    title=Path(filename).stem[:100] or public_id,
                    file_name=f"{public_id.split('/')[-1]}.{extension}",
                    original_name=filename,
                    mime_type=mime_type,
                    size=len(content),
                    url=url,
                    public_id=public_id,
                    format=extension,
                    type=file_type_for(mime_type, extension),
                    tags=json.dumps([]),
                    uploaded_by_id=user.id,
                ))
                uploaded.append(UploadedFile(
                    url=url,
                    public_id=public_id,
                    original_name=filename,
                    size=len(content),
                    format=extension,
                ))
            await self.db.commit()
        except Exception:
            # Keep disk and database in step
            await self.db.rollback()
            for public_id, extension in saved:
                await self.storage.remove(public_id, extension)
            raise

        for item in uploaded:
            logger.info(f"File uploaded: {item.public_id} ({item.size} bytes) by {user.id}")
        return uploaded

    async def upload(self, user: User, upload: UploadFile) -> UploadedFile:
        pending = await self._read(upload)
        return (await self._store(user, [pending]))[0]

    async def upload_many(self, user: User, uploads: List[UploadFile]) -> List[UploadedFile]:
        """Store every file or none of them."""
        if not uploads:
            raise validation_error("No files provided", details=[{"field": "files", "message": "required"}])
        pending = [await self._read(upload) for upload in uploads]
        return await self._store(user, pending)

    async def delete(self, user: User, public_id: str) -> None:
        record = (await self.db.execute(select(File).where(File.public_id == public_id))).scalar_one_or_none()
        if record is None:
            raise not_found_error("File", public_id)
        if record.uploaded_by_id != user.id:
            raise authorization_error("Only the uploader can delete this file")

        await self.storage.remove(public_id, record.format)
        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"File deleted: {public_id}")
