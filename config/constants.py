"""
Constants shared by the admin client and the mock server.
Storage keys and messages mirror what the web client has always used.
"""

class StorageKeys:
    """Keys of the persisted admin session."""

    AUTH_TOKEN = "authToken"
    REFRESH_TOKEN = "refreshToken"
    USER = "user"
    IS_AUTHENTICATED = "isAuthenticated"

    ALL = (USER, IS_AUTHENTICATED, AUTH_TOKEN, REFRESH_TOKEN)

class Pagination:
    DEFAULT_PAGE = 1
    DEFAULT_LIMIT = 10

class Messages:
    """User-facing (Vietnamese) strings."""

    SUCCESS_TITLE = "Thành công"
    ERROR_TITLE = "Lỗi"
    GENERIC_ERROR = "Có lỗi xảy ra"
    EMPTY_STATE = "Không có dữ liệu"
    SEARCH_PLACEHOLDER = "Tìm kiếm..."
    CONFIRM_DELETE_TITLE = "Xác nhận xóa"
    CONFIRM_DELETE = "Bạn có chắc chắn muốn xóa mục này? Hành động này không thể hoàn tác."
    ACTIONS_HEADER = "Thao tác"
    INVALID_CREDENTIALS = "Tên đăng nhập hoặc mật khẩu không đúng"
    LOGIN_ERROR = "Đã có lỗi xảy ra khi đăng nhập"
    SETUP_ERROR = "Có lỗi xảy ra khi setup"
    API_KEY_ERROR = "Có lỗi xảy ra khi cập nhật API key"
    EXPIRED_AT_REQUIRED = "Vui lòng chọn ngày hết hạn"
    AMOUNT_MUST_BE_POSITIVE = "Số tiền phải lớn hơn 0"
    PASSWORD_MISMATCH = "Mật khẩu xác nhận không khớp!"
    REQUIRED_FIELD = "Trường này là bắt buộc"
    PAGE_SUMMARY = "Hiển thị từ {start} đến {end} trong tổng số {total} kết quả"
    PAGE_POSITION = "Trang {page} / {total_pages}"

# Demo accounts accepted by the mock server
MOCK_CREDENTIALS = {
    "admin": "admin123",
    "user": "user123",
    "demo": "demo",
}
