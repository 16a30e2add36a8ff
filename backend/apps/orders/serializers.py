from rest_framework import serializers


class PlaceOrderRequestSerializer(serializers.Serializer):
    addressId = serializers.IntegerField(source="address_id", min_value=1)
    paymentMethod = serializers.CharField(
        source="payment_method", max_length=50, trim_whitespace=False
    )
    pgName = serializers.CharField(source="pg_name", max_length=100, trim_whitespace=False)
    pgPaymentId = serializers.CharField(
        source="pg_payment_id", max_length=255, trim_whitespace=False
    )
    pgStatus = serializers.CharField(source="pg_status", max_length=100, trim_whitespace=False)
    pgResponseMessage = serializers.CharField(
        source="pg_response_message",
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=False,
    )


class PaymentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    paymentMethod = serializers.CharField(source="payment_method")
    pgName = serializers.CharField(source="pg_name")
    pgPaymentId = serializers.CharField(source="pg_payment_id")
    pgStatus = serializers.CharField(source="pg_status")
    pgResponseMessage = serializers.CharField(source="pg_response_message")


class ShippingAddressSerializer(serializers.Serializer):
    addressId = serializers.IntegerField(source="address_id", allow_null=True)
    street = serializers.CharField()
    buildingName = serializers.CharField(source="building_name")
    city = serializers.CharField()
    state = serializers.CharField()
    country = serializers.CharField()
    zipcode = serializers.CharField()


class OrderItemSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id", allow_null=True)
    productName = serializers.CharField(source="product_name")
    quantity = serializers.IntegerField()
    discount = serializers.CharField()
    orderedProductPrice = serializers.CharField(source="ordered_product_price")


class OrderReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    email = serializers.EmailField()
    orderDate = serializers.CharField(source="order_date")
    totalAmount = serializers.CharField(source="total_amount")
    orderStatus = serializers.CharField(source="order_status")
    address = ShippingAddressSerializer()
    payment = PaymentSerializer()
    items = OrderItemSerializer(many=True)
