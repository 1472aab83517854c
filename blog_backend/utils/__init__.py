from blog_backend.utils.cookies import clear_auth_cookie, set_auth_cookie
from blog_backend.utils.helpers import hash_token, host, page_count, page_offset, today_str, utc_now

__all__ = [
    "clear_auth_cookie",
    "hash_token",
    "host",
    "page_count",
    "page_offset",
    "set_auth_cookie",
    "today_str",
    "utc_now",
]
