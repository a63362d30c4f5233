from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("property_type", models.CharField(
                    choices=[("apartment", "Apartment"), ("house", "House"), ("pg", "PG"),
                             ("hostel", "Hostel"), ("room", "Room"), ("villa", "Villa")],
                    default="apartment", max_length=16,
                )),
                ("listing_type", models.CharField(
                    choices=[("rent", "Rent"), ("pg", "PG")], default="rent", max_length=8,
                )),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("city", models.CharField(blank=True, default="", max_length=128)),
                ("images", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="properties",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "verbose_name_plural": "properties",
                "ordering": ["-created_at"],
            },
        ),
    ]
