from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("__str__", "email", "phone_number", "rewards_points", "created_at")
    search_fields = ("name", "email", "phone_number")
    readonly_fields = ("id", "rewards_points", "created_at", "updated_at")
