from rest_framework import serializers

from core.sanitizers import sanitize_text
from .models import Profile, User


class UserSerializer(serializers.ModelSerializer):
    is_reviewer = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'first_name',
            'last_name',
            'role',
            'is_reviewer',
            'date_joined',
        ]
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = [
            'name',
            'email',
            'department',
            'phone',
            'designation',
            'employee_id',
            'photo_url',
            'updated_at',
        ]
        read_only_fields = ['photo_url', 'updated_at']
        extra_kwargs = {
            'email': {'required': False, 'allow_blank': True},
            'phone': {'required': False, 'allow_blank': True},
            'employee_id': {'required': False, 'allow_blank': True},
        }

    def validate_name(self, value):
        value = sanitize_text(value)
        if not value:
            raise serializers.ValidationError("Name is required.")
        return value

    def validate_department(self, value):
        return sanitize_text(value)

    def validate_designation(self, value):
        return sanitize_text(value)

    def validate_phone(self, value):
        return sanitize_text(value)

    def validate_employee_id(self, value):
        return sanitize_text(value)
