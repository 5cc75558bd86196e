from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "realtor_name", "guest", "status", "start_date", "end_date")
    list_select_related = ("property", "property__realtor", "guest")
    search_fields = ("property__title", "property__location", "guest__email", "property__realtor__business_name")
    list_filter = (
        "status",
        ("start_date", admin.DateFieldListFilter),
        ("end_date", admin.DateFieldListFilter),
        ("property", admin.RelatedOnlyFieldListFilter),
    )
    ordering = ("-start_date",)

    @admin.display(description="Realtor")
    def realtor_name(self, obj):
        return getattr(getattr(obj.property, "realtor", None), "business_name", None)
