from django.contrib import admin
from .models import Review, ReviewPhoto, ReviewResponse


class ReviewPhotoInline(admin.TabularInline):
    model = ReviewPhoto
    extra = 0
    fields = ("order", "url", "caption")


class ReviewResponseInline(admin.StackedInline):
    model = ReviewResponse
    extra = 0
    fields = ("author", "comment", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "author", "rating", "is_verified", "is_visible", "has_response", "created_at")
    list_select_related = ("property", "author")
    search_fields = ("property__title", "author__email", "comment")
    list_filter = (
        "rating",
        "is_visible",
        "is_verified",
        ("property", admin.RelatedOnlyFieldListFilter),
    )
    readonly_fields = ("booking", "created_at", "updated_at")
    ordering = ("-id",)
    inlines = (ReviewPhotoInline, ReviewResponseInline)

    @admin.display(boolean=True, description="Responded")
    def has_response(self, obj):
        return hasattr(obj, "host_response")
