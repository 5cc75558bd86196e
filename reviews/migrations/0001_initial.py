import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
        ("properties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rating", models.PositiveSmallIntegerField()),
                ("cleanliness_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("communication_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("check_in_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("accuracy_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("location_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("value_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("comment", models.TextField(blank=True)),
                ("is_verified", models.BooleanField(default=False)),
                ("is_visible", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to=settings.AUTH_USER_MODEL)),
                ("booking", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="review", to="bookings.booking")),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="properties.property")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["property", "is_visible", "created_at"], name="review_property_visible_idx"),
                    models.Index(fields=["author", "created_at"], name="review_author_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("rating__gte", 1), ("rating__lte", 5)), name="review_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("cleanliness_rating__gte", 1), ("cleanliness_rating__lte", 5)), ("cleanliness_rating__isnull", True), _connector="OR"), name="review_cleanliness_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("communication_rating__gte", 1), ("communication_rating__lte", 5)), ("communication_rating__isnull", True), _connector="OR"), name="review_communication_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("check_in_rating__gte", 1), ("check_in_rating__lte", 5)), ("check_in_rating__isnull", True), _connector="OR"), name="review_check_in_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("accuracy_rating__gte", 1), ("accuracy_rating__lte", 5)), ("accuracy_rating__isnull", True), _connector="OR"), name="review_accuracy_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("location_rating__gte", 1), ("location_rating__lte", 5)), ("location_rating__isnull", True), _connector="OR"), name="review_location_rating_between_1_5"),
                    models.CheckConstraint(condition=models.Q(models.Q(("value_rating__gte", 1), ("value_rating__lte", 5)), ("value_rating__isnull", True), _connector="OR"), name="review_value_rating_between_1_5"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReviewPhoto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("url", models.URLField(max_length=500)),
                ("caption", models.CharField(blank=True, max_length=255)),
                ("order", models.PositiveSmallIntegerField(default=0)),
                ("review", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="photos", to="reviews.review")),
            ],
            options={
                "ordering": ["order"],
                "constraints": [
                    models.UniqueConstraint(fields=("review", "order"), name="review_photo_unique_order"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReviewResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="review_responses", to=settings.AUTH_USER_MODEL)),
                ("review", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="host_response", to="reviews.review")),
            ],
        ),
        migrations.CreateModel(
            name="ReviewHelpful",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("review", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="helpful_marks", to="reviews.review")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="helpful_marks", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("review", "user"), name="review_helpful_unique_user"),
                ],
            },
        ),
    ]
