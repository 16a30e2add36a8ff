"""In-memory stand-ins for the cart, product and stock collaborators."""
from decimal import Decimal
from types import SimpleNamespace


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def make_product(product_id, name="Widget", special_price="10.00", discount="0", quantity=10):
    return SimpleNamespace(
        id=product_id,
        name=name,
        special_price=Decimal(special_price),
        discount=Decimal(discount),
        quantity=quantity,
    )


class FakeProductRepository:
    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    def get(self, **filters):
        return self.products.get(filters.get("id"))


class FakeStock:
    """Reads stock straight off the fake products."""

    def __init__(self, products: FakeProductRepository):
        self.products = products
        self.decrements = []

    def current_quantity(self, product_id):
        return self.products.products[product_id].quantity

    def check_available(self, product_id, quantity):
        stock = self.current_quantity(product_id)
        return stock > 0 and stock >= quantity

    def decrement(self, product_id, quantity):
        self.decrements.append((product_id, quantity))
        self.products.products[product_id].quantity -= quantity


class FakeCartRepository:
    def __init__(self):
        self.carts = {}
        self._next_id = 1

    def _match(self, filters):
        for cart in self.carts.values():
            if all(getattr(cart, k) == v for k, v in filters.items()):
                return cart
        return None

    def get(self, **filters):
        return self._match(filters)

    def get_for_update(self, **filters):
        return self._match(filters)

    def list(self, **filters):
        return [c for c in self.carts.values() if all(getattr(c, k) == v for k, v in filters.items())]

    def create(self, **data):
        cart = SimpleNamespace(id=self._next_id, **data)
        self.carts[cart.id] = cart
        self._next_id += 1
        return cart

    def update(self, cart, **data):
        for key, value in data.items():
            setattr(cart, key, value)
        return cart


class FakeCartItemRepository:
    def __init__(self):
        self.items = []
        self._next_id = 1

    def list_for_cart(self, cart_id):
        return [i for i in self.items if i.cart_id == cart_id]

    def list_for_product(self, product_id):
        return [i for i in self.items if i.product_id == product_id]

    def get_for_cart_product(self, cart_id, product_id):
        for item in self.items:
            if item.cart_id == cart_id and item.product_id == product_id:
                return item
        return None

    def create(self, **data):
        item = SimpleNamespace(id=self._next_id, **data)
        self._next_id += 1
        self.items.append(item)
        return item

    def update(self, item, **data):
        for key, value in data.items():
            setattr(item, key, value)
        return item

    def delete(self, item):
        self.items.remove(item)

    def delete_for_cart(self, cart_id):
        before = len(self.items)
        self.items = [i for i in self.items if i.cart_id != cart_id]
        return before - len(self.items)


class FakeCartMapper:
    def __init__(self, items: FakeCartItemRepository):
        self.items = items

    def to_dto(self, cart):
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "total_price": str(cart.total_price),
            "items": [
                (i.product_id, i.quantity, str(i.product_price))
                for i in self.items.list_for_cart(cart.id)
            ],
        }

    def many_to_dto(self, carts):
        return [self.to_dto(c) for c in carts]
