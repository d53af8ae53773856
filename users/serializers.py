from rest_framework import serializers

from django.contrib.auth import get_user_model

User = get_user_model()


class WhoAmISerializer(serializers.ModelSerializer):
    role = serializers.CharField(source="effective_role", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "full_name", "role"]
        read_only_fields = fields
