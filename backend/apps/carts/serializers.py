from rest_framework import serializers

from apps.catalog.serializers import ProductReadSerializer


class CartItemSerializer(serializers.Serializer):
    product = ProductReadSerializer()
    quantity = serializers.IntegerField()
    unitPrice = serializers.CharField(source="unit_price")
    discount = serializers.CharField()
    lineTotal = serializers.CharField(source="line_total")


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    totalPrice = serializers.CharField(source="total_price")
    items = CartItemSerializer(many=True)
