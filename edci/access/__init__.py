from .allow_list import User, can_view_hospital, filter_hospitals, load_users, find_user

__all__ = ["User", "can_view_hospital", "filter_hospitals", "load_users", "find_user"]
