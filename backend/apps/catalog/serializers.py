from decimal import Decimal

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import Category


class CategorySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(
        max_length=100,
        validators=[UniqueValidator(queryset=Category.objects.all())],
    )


class ProductReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
    image = serializers.CharField()
    quantity = serializers.IntegerField()
    price = serializers.CharField()
    discount = serializers.CharField()
    specialPrice = serializers.CharField(source="special_price")
    categories = CategorySerializer(many=True)


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=3, max_length=255)
    description = serializers.CharField(min_length=6)
    image = serializers.CharField(max_length=255, required=False)
    quantity = serializers.IntegerField(min_value=0)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    discount = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        required=False,
    )
    categories = serializers.ListField(child=serializers.IntegerField(), required=False)
