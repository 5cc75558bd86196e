from django.contrib import admin
from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "realtor", "location", "price", "status", "created_at")
    list_select_related = ("realtor",)
    search_fields = ("title", "description", "location", "realtor__business_name", "realtor__user__email")
    list_filter = (
        "status",
        ("created_at", admin.DateFieldListFilter),
        ("realtor", admin.RelatedOnlyFieldListFilter),
    )
    ordering = ("-created_at",)
    date_hierarchy = "created_at"
