import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("order_cycles", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ShippingMethod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.SlugField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("carrier_code", models.CharField(blank=True, default="", max_length=32)),
                ("requires_address", models.BooleanField(default=True)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("distributors", models.ManyToManyField(blank=True, related_name="shipping_methods", to="order_cycles.enterprise")),
            ],
            options={
                "ordering": ["sort_order", "code"],
            },
        ),
        migrations.CreateModel(
            name="ShippingRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("country_code", models.CharField(default="LT", max_length=2)),
                ("net_eur", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("method", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="rates", to="shipping.shippingmethod")),
            ],
            options={
                "ordering": ["method__sort_order", "method__code", "country_code"],
                "constraints": [models.UniqueConstraint(fields=("method", "country_code"), name="uniq_shipping_rate_per_country")],
            },
        ),
    ]
