import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
        ("order_cycles", "0001_initial"),
        ("payments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("state", models.CharField(choices=[("cart", "Cart"), ("address", "Address"), ("delivery", "Delivery"), ("payment", "Payment"), ("confirm", "Confirm"), ("complete", "Complete")], default="cart", max_length=16)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("shipping_method", models.CharField(blank=True, default="", max_length=50)),
                ("payment_method", models.CharField(blank=True, default="", max_length=50)),
                ("items_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("shipping_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("shipping_full_name", models.CharField(blank=True, default="", max_length=200)),
                ("shipping_company", models.CharField(blank=True, default="", max_length=200)),
                ("shipping_line1", models.CharField(blank=True, default="", max_length=255)),
                ("shipping_city", models.CharField(blank=True, default="", max_length=120)),
                ("shipping_postal_code", models.CharField(blank=True, default="", max_length=32)),
                ("shipping_country_code", models.CharField(blank=True, default="", max_length=2)),
                ("shipping_phone", models.CharField(blank=True, default="", max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("distributor", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="distributed_orders", to="order_cycles.enterprise")),
                ("order_cycle", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="orders", to="order_cycles.ordercycle")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="orders", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["user", "-created_at"], name="idx_order_user_created"),
                    models.Index(fields=["order_cycle", "completed_at"], name="idx_order_cycle_completed"),
                    models.Index(fields=["state", "-created_at"], name="idx_order_state_created"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sku", models.CharField(blank=True, default="", max_length=64)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("qty", models.PositiveIntegerField(default=1)),
                ("total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="checkout.order")),
                ("variant", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="order_lines", to="catalog.variant")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("state", models.CharField(choices=[("checkout", "Checkout"), ("processing", "Processing"), ("pending", "Pending"), ("completed", "Completed"), ("failed", "Failed"), ("void", "Void")], default="checkout", max_length=20)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("raw_response", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("method", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="payments", to="payments.paymentmethod")),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="checkout.order")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["state", "-created_at"], name="idx_payment_state_created")],
            },
        ),
    ]
