from rest_framework import serializers


class AddressSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    street = serializers.CharField(min_length=5, max_length=150)
    buildingName = serializers.CharField(source="building_name", min_length=5, max_length=150)
    city = serializers.CharField(min_length=4, max_length=100)
    state = serializers.CharField(min_length=2, max_length=100)
    country = serializers.CharField(min_length=2, max_length=100)
    zipcode = serializers.CharField(min_length=5, max_length=20)



class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    phone = serializers.CharField(read_only=True, allow_null=True)
    is_staff = serializers.BooleanField(read_only=True)
    addresses = AddressSerializer(many=True, read_only=True)
