# openclass/client/resources/uploads.py
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from .base import Resource
from ..invalidation import MutationKind

FileSpec = Tuple[str, bytes, Optional[str]]


class UploadResource(Resource):
    async def upload_file(self, filename: str, content: bytes, content_type: Optional[str] = None) -> Dict[str, Any]:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        return await self.mutations.run(
            MutationKind.UPLOAD_FILE,
            lambda: self.api.post("/upload/single", files=files),
            success_message="File uploaded",
            error_message="File upload failed",
        )

    async def upload_files(self, files: List[FileSpec]) -> Dict[str, Any]:
        parts = [
            ("files", (filename, content, content_type or "application/octet-stream"))
            for filename, content, content_type in files
        ]
        return await self.mutations.run(
            MutationKind.UPLOAD_FILES,
            lambda: self.api.post("/upload/multiple", files=parts),
            success_message=f"{len(parts)} files uploaded",
            error_message="File upload failed",
        )

    async def delete_file(self, public_id: str) -> Dict[str, Any]:
        # Public ids contain "/" and must travel as one path segment
        encoded = quote(public_id, safe="")
        return await self.mutations.run(
            MutationKind.DELETE_FILE,
            lambda: self.api.delete(f"/upload/{encoded}"),
            success_message="File deleted",
            error_message="Failed to delete file",
        )
