from pages.base_page import Page

class NotFoundPage(Page):
    title = "404 Page Not Found"
    description = "Trang bạn tìm kiếm không tồn tại."
