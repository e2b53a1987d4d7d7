from dataclasses import dataclass
from typing import Optional
from .models import User


@dataclass
class UserDTO:
    id: int
    username: str
    email: str
    name: str
    image: Optional[str]


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        username=u.username,
        email=u.email,
        name=getattr(u, "name", "") or u.get_full_name() or u.username,
        image=getattr(u, "image", "") or None,
    )
