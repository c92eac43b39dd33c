import os
from typing import Any, Dict, List

from core.exceptions import StorageError, ValidationError
from core.logging_config import LoggerMixin
from core.normalization import unwrap_envelope
from data.models import UploadedFile

class FileService(LoggerMixin):
    """Uploads local files through the multipart file endpoints."""

    def __init__(self, api: Any):
        self.api = api

    @staticmethod
    def _to_uploaded(data: Dict[str, Any], path: str) -> UploadedFile:
        return UploadedFile(
            id=str(data.get("id", "")),
            file_url=data.get("fileUrl") or data.get("url") or "",
            file_name=data.get("fileName") or os.path.basename(path),
        )

    def upload_single(self, path: str) -> UploadedFile:
        if not os.path.isfile(path):
            raise ValidationError(f"File not found: {path}", field="file")
        try:
            with open(path, "rb") as fh:
                body = self.api.upload_single((os.path.basename(path), fh))
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")
        data = unwrap_envelope(body)
        if not isinstance(data, dict) or "id" not in data:
            raise ValidationError("Upload response has no file id")
        self.logger.info("File uploaded", file=os.path.basename(path), file_id=data["id"])
        return self._to_uploaded(data, path)

    def upload_multiple(self, paths: List[str]) -> List[UploadedFile]:
        missing = [path for path in paths if not os.path.isfile(path)]
        if missing:
            raise ValidationError(f"File not found: {', '.join(missing)}", field="files")

        handles = []
        try:
            for path in paths:
                handles.append(open(path, "rb"))
            body = self.api.upload_multiple(
                [(os.path.basename(path), fh) for path, fh in zip(paths, handles)]
            )
        except OSError as e:
            raise StorageError(f"Failed to read upload: {e}")
        finally:
            for fh in handles:
                fh.close()

        data = unwrap_envelope(body)
        if isinstance(data, dict):
            data = data.get("items") or data.get("files") or []
        if not isinstance(data, list):
            data = []
        return [self._to_uploaded(item, path)
                for item, path in zip(data, paths) if isinstance(item, dict)]

    def delete(self, file_id: str) -> None:
        self.api.delete(file_id)
