import os
import sys
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.constants import Messages
from core.exceptions import ApiError, NetworkError, ValidationError
from data.models import Order, UploadedFile
from ui.entity_form import EntityForm, FieldType, FormField
from ui.notifications import Notifier
from ui.order_forms import OrderSetupForm, ToolApiKeyForm
from ui.tool_form import ToolForm

FIELDS = [
    FormField("name", "Tên", required=True),
    FormField("price", "Giá", FieldType.NUMBER),
    FormField("status", "Trạng thái", FieldType.SELECT, options=[("1", "On"), ("0", "Off")]),
]


class TestEntityForm:

    def test_required_and_typed_fields_are_validated(self):
        on_submit = Mock()
        form = EntityForm("Thêm", FIELDS, on_submit)
        form.bind(True, {"price": "abc", "status": "7"})

        assert form.submit() is False
        assert set(form.errors) == {"name", "price", "status"}
        on_submit.assert_not_called()

    def test_failed_submit_keeps_dialog_and_values(self):
        on_open_change = Mock()
        on_submit = Mock(side_effect=ApiError(500, {"message": "boom"}))
        form = EntityForm("Thêm", FIELDS, on_submit, on_open_change)
        form.bind(True, {"name": "Proxy VN", "price": "1000", "status": "1"})

        assert form.submit() is False
        assert form.is_open
        assert form.form_data == {"name": "Proxy VN", "price": "1000", "status": "1"}
        assert isinstance(form.last_error, ApiError)
        assert not form.is_loading
        on_open_change.assert_not_called()

    def test_successful_submit_does_not_close_by_itself(self):
        on_submit = Mock()
        form = EntityForm("Thêm", FIELDS, on_submit)
        form.bind(True, {"name": "Proxy VN"})

        assert form.submit() is True
        on_submit.assert_called_once_with({"name": "Proxy VN"})
        assert form.is_open

    def test_cancel_notifies_owner(self):
        on_open_change = Mock()
        form = EntityForm("Thêm", FIELDS, Mock(), on_open_change)

        form.cancel()

        on_open_change.assert_called_once_with(False)


class TestToolForm:

    @pytest.fixture
    def file_service(self):
        service = Mock()
        service.upload_single.side_effect = [
            UploadedFile(id="f1", file_url="/static/f1.png", file_name="a.png"),
            NetworkError("upload failed"),
        ]
        return service

    def test_bind_normalizes_existing_tool(self, file_service):
        form = ToolForm("Sửa", file_service, Mock())
        form.bind(True, {"code": "T1", "name": "Auto", "status": 0,
                         "images": [{"id": 3, "fileUrl": "/x.png"}, "4"],
                         "plans": [{"name": "1M", "price": 50000, "duration": 30}]})

        assert form.value("status") == "0"
        assert [image["id"] for image in form.images] == ["3", "4"]
        assert form.plans[0]["name"] == "1M"

    def test_uploads_and_payload(self, file_service):
        on_submit = Mock()
        form = ToolForm("Thêm", file_service, on_submit)
        form.bind(True, {})
        form.set_value("code", "T9")
        form.set_value("name", "New tool")
        form.add_plan()
        form.update_plan(0, "name", "Vĩnh viễn")
        form.update_plan(0, "price", "99000")
        form.update_plan(0, "duration", "-1")

        assert form.select_files(["a.png", "b.png"]) == 1
        assert form.upload_errors == ["b.png"]

        assert form.submit() is True
        payload = on_submit.call_args.args[0]
        assert payload["status"] == 1
        assert payload["images"] == ["f1"]
        assert payload["plans"] == [{"name": "Vĩnh viễn", "price": 99000, "duration": -1}]

    def test_file_picker_uploads_selected_images(self, file_service):
        form = ToolForm("Thêm", file_service, Mock())
        form.bind(True, {})
        picker = form.file_picker()

        with pytest.raises(ValidationError):
            picker.select(["notes.txt"])
        file_service.upload_single.assert_not_called()

        picker.select(["a.png"])

        file_service.upload_single.assert_called_once_with("a.png")
        assert form.images == [{"id": "f1", "fileUrl": "/static/f1.png", "fileName": "a.png"}]
        assert picker.summary == "Đã chọn 1 tệp"

    def test_unknown_plan_field(self, file_service):
        form = ToolForm("Thêm", file_service, Mock())
        form.bind(True, {})
        form.add_plan()

        with pytest.raises(ValueError):
            form.update_plan(0, "discount", 1)


def _order(order_type, status="setup", **extra):
    data = {"id": "o1", "code": "DH001", "type": order_type, "status": status,
            "user": {"id": "2", "fullname": "user"}}
    data.update(extra)
    return Order.from_api(data)


class TestOrderSetupForm:

    def test_proxy_requires_expiry(self):
        service, notifier = Mock(), Notifier()
        form = OrderSetupForm(service, notifier)
        form.open(_order("proxy"))
        form.set_value("proxies", "1.2.3.4:8080")

        assert form.submit() is False
        assert notifier.last.description == Messages.EXPIRED_AT_REQUIRED
        assert form.is_open
        service.setup_proxy.assert_not_called()

    def test_vps_setup_success_closes(self):
        service, notifier = Mock(), Notifier()
        on_success, on_open_change = Mock(), Mock()
        form = OrderSetupForm(service, notifier, on_success, on_open_change)
        form.open(_order("vps"))
        for name, value in (("ip", "10.0.0.1"), ("username", "root"), ("password", "pw")):
            form.set_value(name, value)

        assert form.can_submit
        assert form.submit() is True
        service.setup_vps.assert_called_once_with("o1", "10.0.0.1", "root", "pw")
        assert notifier.last.description == "Đã setup VPS thành công"
        on_success.assert_called_once()
        on_open_change.assert_called_once_with(False)
        assert not form.is_open

    def test_failure_stays_open_with_api_message(self):
        service, notifier = Mock(), Notifier()
        service.setup_proxy.side_effect = ApiError(400, {"message": "Order already set up"})
        form = OrderSetupForm(service, notifier)
        form.open(_order("proxy"))
        form.set_value("proxies", "1.2.3.4:8080")
        form.set_value("expiredAt", "2025-12-31")

        assert form.submit() is False
        assert notifier.last.is_error
        assert notifier.last.description == "Order already set up"
        assert form.is_open


def test_tool_api_key_form():
    service, notifier = Mock(), Notifier()
    form = ToolApiKeyForm(service, notifier)
    form.open(_order("tool", status="active", toolOrder={"apiKey": "old-key", "name": "Auto"}))

    assert form.api_key == "old-key"
    form.api_key = "new-key"
    assert form.submit() is True
    service.change_tool_api_key.assert_called_once_with("o1", "new-key")
    assert notifier.last.description == "Đã cập nhật API key thành công"
    assert form.api_key == ""
