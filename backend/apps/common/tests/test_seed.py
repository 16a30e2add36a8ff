from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.catalog.models import Category, Product
from apps.users.models import Address, User


class SeedStorefrontCommandTests(TestCase):
    def test_seed_is_repeatable(self):
        call_command("seed_storefront", stdout=StringIO())
        call_command("seed_storefront", stdout=StringIO())

        self.assertEqual(Category.objects.count(), 4)
        self.assertEqual(Product.objects.count(), 9)
        self.assertTrue(User.objects.get(username="admin").is_staff)
        customer = User.objects.get(username="customer")
        self.assertTrue(customer.check_password("Customer#123"))
        self.assertEqual(Address.objects.filter(user=customer).count(), 1)

    def test_special_prices_are_derived(self):
        call_command("seed_storefront", stdout=StringIO())
        skillet = Product.objects.get(name="Cast Iron Skillet")
        self.assertEqual(str(skillet.special_price), "27.96")
