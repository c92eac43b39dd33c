from typing import Any, Callable, Dict, List, Optional

from ui.entity_form import EntityForm, FieldType, FormField
from ui.file_upload import FileUpload

STATUS_OPTIONS = [("1", "Hoạt động"), ("0", "Không hoạt động")]

TOOL_FIELDS = [
    FormField("code", "Mã Tool", required=True),
    FormField("name", "Tên Tool", required=True),
    FormField("description", "Mô tả", FieldType.TEXTAREA),
    FormField("demo", "Link Demo"),
    FormField("linkDownload", "Link Download"),
    FormField("status", "Trạng thái", FieldType.SELECT, options=STATUS_OPTIONS),
]

def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0

class ToolForm(EntityForm):
    """
    Tool create/edit form with pricing plans and images.

    Images are uploaded as soon as they are selected; only their ids are
    sent with the tool.
    """

    def __init__(self, title: str, file_service: Any,
                 on_submit: Callable[[Dict[str, Any]], Any],
                 on_open_change: Optional[Callable[[bool], None]] = None,
                 description: str = ""):
        super().__init__(title, TOOL_FIELDS, on_submit, on_open_change, description)
        self.file_service = file_service
        self.upload_errors: List[str] = []

    def bind(self, is_open: bool, initial_data: Optional[Dict[str, Any]] = None) -> None:
        initial = dict(initial_data or {})
        images = [
            {
                "id": str(image.get("id", "")) if isinstance(image, dict) else str(image),
                "fileUrl": image.get("fileUrl", "") if isinstance(image, dict) else "",
                "fileName": image.get("fileName", "Existing image") if isinstance(image, dict)
                else "Existing image",
            }
            for image in initial.get("images") or []
        ]
        status = initial.get("status")
        super().bind(is_open, {
            "code": initial.get("code") or "",
            "name": initial.get("name") or "",
            "description": initial.get("description") or "",
            "demo": initial.get("demo") or "",
            "linkDownload": initial.get("linkDownload") or "",
            "status": str(status) if status is not None else "1",
            "images": images,
            "plans": [dict(plan) for plan in initial.get("plans") or []],
        })
        self.upload_errors = []

    @property
    def plans(self) -> List[Dict[str, Any]]:
        return self.form_data.setdefault("plans", [])

    @property
    def images(self) -> List[Dict[str, Any]]:
        return self.form_data.setdefault("images", [])

    def add_plan(self) -> None:
        self.plans.append({"name": "", "price": "", "duration": ""})

    def update_plan(self, index: int, field: str, value: Any) -> None:
        if field not in ("name", "price", "duration"):
            raise ValueError(f"Unknown plan field: {field}")
        self.plans[index] = {**self.plans[index], field: value}

    def remove_plan(self, index: int) -> None:
        del self.plans[index]

    def file_picker(self) -> FileUpload:
        """Image picker whose selection uploads straight into this form."""
        return FileUpload(self.select_files, multiple=True, accept="image/*")

    def select_files(self, paths: List[str]) -> int:
        """Upload each file now; failures are recorded and skipped. Returns the number added."""
        added = 0
        for path in paths:
            try:
                uploaded = self.file_service.upload_single(path)
            except Exception as e:
                self.logger.error("Error uploading file", file=path, error=str(e))
                self.upload_errors.append(path)
                continue
            self.images.append({"id": uploaded.id, "fileUrl": uploaded.file_url,
                                "fileName": uploaded.file_name})
            added += 1
        return added

    def remove_image(self, index: int) -> None:
        del self.images[index]

    def payload(self) -> Dict[str, Any]:
        return self.build_payload()

    def build_payload(self) -> Dict[str, Any]:
        data = self.form_data
        return {
            "code": data.get("code", ""),
            "name": data.get("name", ""),
            "description": data.get("description", ""),
            "demo": data.get("demo", ""),
            "linkDownload": data.get("linkDownload", ""),
            "status": _to_int(data.get("status", "1")),
            "images": [image["id"] for image in self.images],
            "plans": [
                {
                    "name": plan.get("name", ""),
                    "price": _to_int(plan.get("price")),
                    "duration": _to_int(plan.get("duration")),
                }
                for plan in self.plans
            ],
        }
