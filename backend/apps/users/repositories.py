from apps.common.repository import GenericRepository
from .models import User, Address


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get(self, **filters):
        return self.model.objects.prefetch_related("addresses").filter(**filters).first()

    def create_user(self, **data) -> User:
        return User.objects.create_user(**data)


class AddressRepository(GenericRepository[Address]):
    def __init__(self):
        super().__init__(Address)

    def list_for_user(self, user_id: int):
        return self.model.objects.filter(user_id=user_id).order_by("id")

    def list_ordered(self, ordering: str):
        return self.model.objects.all().order_by(ordering, "id")
