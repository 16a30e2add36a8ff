from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    # username, password, first_name, last_name and the staff flags come from AbstractUser
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, blank=True, null=True)

    def __str__(self):
        return self.username


class Address(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='addresses')
    street = models.CharField(max_length=150)
    building_name = models.CharField(max_length=150)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    zipcode = models.CharField(max_length=20)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'addresses'
        ordering = ['id']

    def __str__(self):
        return f"{self.building_name}, {self.street}, {self.city}"
