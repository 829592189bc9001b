from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth import get_user_model

from .models import Registration

User = get_user_model()


class RegistrationInline(admin.StackedInline):
    model = Registration
    can_delete = False
    extra = 0
    readonly_fields = ('created_at', 'updated_at')


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    model = User
    inlines = [RegistrationInline]
    list_display = ['username', 'email', 'role', 'phone_number', 'is_staff']
    list_filter = ['role', 'is_staff', 'is_active']
    fieldsets = (
        (None, {'fields': ('username', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'email', 'phone_number', 'address', 'date_of_birth', 'role')}),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'role', 'phone_number', 'password1', 'password2'),
        }),
    )


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'role', 'grade', 'created_at']
    list_filter = ['role', 'grade']
    search_fields = ['email', 'first_name', 'last_name', 'id_number', 'parent_name']
    readonly_fields = ('user', 'created_at', 'updated_at')
