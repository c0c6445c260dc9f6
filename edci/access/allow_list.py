from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TypeVar

ADMIN_ROLE = "admin"

T = TypeVar("T")


@dataclass(frozen=True)
class User:
    username: str
    role: str = "viewer"
    allowed_hospitals: frozenset = field(default_factory=frozenset)
    is_active: bool = True


def load_users(entries: Iterable[dict]) -> List[User]:
    users = []
    for entry in entries or []:
        users.append(
            User(
                username=str(entry["username"]),
                role=str(entry.get("role", "viewer")),
                allowed_hospitals=frozenset(
                    str(code) for code in entry.get("allowed_hospitals", []) or []
                ),
                is_active=bool(entry.get("is_active", True)),
            )
        )
    return users


def find_user(users: Iterable[User], username: str) -> Optional[User]:
    for user in users:
        if user.username == username:
            return user
    return None


def can_view_hospital(user: Optional[User], hospital_code: str) -> bool:
    if user is None or not user.is_active:
        return False
    if user.role == ADMIN_ROLE:
        return True
    return hospital_code in user.allowed_hospitals


def filter_hospitals(items: Iterable[T], user: Optional[User]) -> List[T]:
    """
    Keep the items (records or scored hospitals) the user may see.

    Items only need a `hospital_code` attribute.
    """
    return [item for item in items if can_view_hospital(user, item.hospital_code)]
