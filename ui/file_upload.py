import os
from typing import Callable, List, Optional, Sequence

from core.exceptions import ValidationError

class FileUpload:
    """
    File picker state: validates the selection and hands it to on_file_select.
    """

    def __init__(self, on_file_select: Callable[[List[str]], None], multiple: bool = False,
                 accept: str = "*", max_files: int = 5):
        self.on_file_select = on_file_select
        self.multiple = multiple
        self.accept = accept
        self.max_files = max_files
        self.selected_files: List[str] = []

    def _accepts(self, path: str) -> bool:
        if self.accept in ("*", ""):
            return True
        ext = os.path.splitext(path)[1].lower()
        for pattern in (p.strip().lower() for p in self.accept.split(",")):
            if pattern.endswith("/*") and pattern.startswith("image"):
                if ext in (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg"):
                    return True
            elif pattern == ext:
                return True
        return False

    def select(self, paths: Sequence[str]) -> Optional[List[str]]:
        files = [p for p in paths if p]
        if not files:
            return None
        if not self.multiple and len(files) > 1:
            files = files[:1]
        if len(files) > self.max_files:
            raise ValidationError(f"Bạn chỉ có thể chọn tối đa {self.max_files} tệp.", field="files")
        rejected = [p for p in files if not self._accepts(p)]
        if rejected:
            raise ValidationError(f"Unsupported file type: {', '.join(rejected)}", field="files")
        self.selected_files = files
        self.on_file_select(files)
        return files

    @property
    def summary(self) -> str:
        return f"Đã chọn {len(self.selected_files)} tệp" if self.selected_files else ""
