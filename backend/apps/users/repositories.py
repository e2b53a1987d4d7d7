from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def username_exists(self, username: str) -> bool:
        return self.model.objects.filter(username__iexact=username).exists()

    def email_exists(self, email: str) -> bool:
        return self.model.objects.filter(email__iexact=email).exists()

    def create_user(self, *, password: str, **data) -> User:
        return self.model.objects.create_user(password=password, **data)
