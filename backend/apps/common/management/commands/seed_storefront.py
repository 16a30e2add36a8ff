from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import Cart, CartItem
from apps.catalog.models import Category, Product
from apps.orders.models import Order, OrderItem, Payment
from apps.users.models import Address, User

CATEGORIES = ["Electronics", "Books", "Home & Kitchen", "Outdoors"]

# name, description, price, discount %, stock, categories
PRODUCTS = [
    ("Noise Cancelling Headphones", "Over-ear wireless headphones with 30 hour battery", "199.00", "15", 25, ["Electronics"]),
    ("Mechanical Keyboard", "Tenkeyless keyboard with hot swappable switches", "89.50", "0", 40, ["Electronics"]),
    ("USB-C Charger 65W", "Compact gallium nitride charger for laptops and phones", "39.99", "10", 120, ["Electronics"]),
    ("The Pragmatic Programmer", "Classic guide to software craftsmanship", "42.00", "5", 60, ["Books"]),
    ("Designing Data-Intensive Applications", "Reliable, scalable and maintainable systems", "55.00", "0", 35, ["Books"]),
    ("Cast Iron Skillet", "Pre-seasoned 12 inch skillet", "34.95", "20", 18, ["Home & Kitchen"]),
    ("Pour-Over Coffee Kit", "Glass dripper, paper filters and gooseneck kettle", "64.00", "0", 12, ["Home & Kitchen"]),
    ("Trail Daypack 22L", "Lightweight pack with hydration sleeve", "79.00", "25", 30, ["Outdoors"]),
    ("Insulated Water Bottle", "Keeps drinks cold for 24 hours", "24.00", "0", 0, ["Outdoors", "Home & Kitchen"]),
]

USERS = [
    {
        "username": "customer",
        "email": "customer@example.com",
        "password": "Customer#123",
        "first_name": "Casey",
        "last_name": "Buyer",
        "phone": "5550100",
        "is_staff": False,
    },
    {
        "username": "admin",
        "email": "admin@example.com",
        "password": "Admin#12345",
        "first_name": "Avery",
        "last_name": "Admin",
        "phone": None,
        "is_staff": True,
    },
]

CUSTOMER_ADDRESS = {
    "street": "742 Evergreen Terrace",
    "building_name": "Evergreen House",
    "city": "Springfield",
    "state": "Oregon",
    "country": "USA",
    "zipcode": "97403",
}


class Command(BaseCommand):
    help = "Seed categories, stocked products, a demo customer with an address and a staff account."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete orders, carts, catalog and users before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            Payment.objects.all().delete()
            CartItem.objects.all().delete()
            Cart.objects.all().delete()
            Address.objects.all().delete()
            User.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()

        self.stdout.write("Seeding categories...")
        by_name = {name: Category.objects.get_or_create(name=name)[0] for name in CATEGORIES}

        self.stdout.write("Seeding products...")
        for name, description, price, discount, stock, categories in PRODUCTS:
            product, _ = Product.objects.update_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": Decimal(price),
                    "discount": Decimal(discount),
                    "quantity": stock,
                },
            )
            product.categories.set([by_name[c] for c in categories])

        self.stdout.write("Seeding users...")
        for payload in USERS:
            attrs = dict(payload)
            raw_password = attrs.pop("password")
            user, _ = User.objects.update_or_create(username=attrs.pop("username"), defaults=attrs)
            user.set_password(raw_password)
            user.save()
            if not user.is_staff:
                Address.objects.get_or_create(user=user, **CUSTOMER_ADDRESS)

        self.stdout.write(self.style.SUCCESS("Storefront seed completed."))
