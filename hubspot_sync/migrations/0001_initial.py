import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CachedContact",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("hubspot_id", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("phone", models.CharField(blank=True, max_length=64, null=True)),
                ("company", models.CharField(blank=True, default="", max_length=255)),
                (
                    "member_type",
                    models.CharField(
                        choices=[("REGULAR", "Regular"), ("PREMIUM", "Premium"), ("ADMIN", "Admin")],
                        default="REGULAR",
                        max_length=32,
                    ),
                ),
                ("last_active", models.DateTimeField(default=django.utils.timezone.now)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "hubspot_cached_contact",
            },
        ),
        migrations.CreateModel(
            name="CachedOpportunity",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("type", models.CharField(blank=True, default="", max_length=128)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Active", "Active"),
                            ("In Progress", "In Progress"),
                            ("Under Review", "Under Review"),
                            ("Completed", "Completed"),
                        ],
                        default="Active",
                        max_length=32,
                    ),
                ),
                ("date_posted", models.DateTimeField(default=django.utils.timezone.now)),
                ("deadline", models.DateTimeField(blank=True, null=True)),
                ("estimated_value", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
            ],
            options={
                "db_table": "hubspot_cached_opportunity",
                "indexes": [models.Index(fields=["status", "deadline"], name="hubspot_opp_status_dl_idx")],
            },
        ),
    ]
