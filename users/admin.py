from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, Profile

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'first_name', 'last_name', 'is_staff')
    list_filter = ('role', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'supabase_uid')
    fieldsets = UserAdmin.fieldsets + (
        ('Portal', {'fields': ('role', 'supabase_uid')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Portal', {'fields': ('role',)}),
    )


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'department', 'designation', 'employee_id', 'updated_at')
    search_fields = ('name', 'email', 'employee_id', 'user__username')
    list_filter = ('department',)
