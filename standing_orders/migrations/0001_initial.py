import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("accounts", "0001_initial"),
        ("catalog", "0001_initial"),
        ("checkout", "0001_initial"),
        ("order_cycles", "0001_initial"),
        ("payments", "0001_initial"),
        ("shipping", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="StandingOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("begins_at", models.DateTimeField(blank=True, null=True)),
                ("ends_at", models.DateTimeField(blank=True, null=True)),
                ("paused_at", models.DateTimeField(blank=True, null=True)),
                ("canceled_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("bill_address", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="accounts.useraddress")),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_orders", to=settings.AUTH_USER_MODEL)),
                ("payment_method", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_orders", to="payments.paymentmethod")),
                ("schedule", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_orders", to="order_cycles.schedule")),
                ("ship_address", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="accounts.useraddress")),
                ("shipping_method", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_orders", to="shipping.shippingmethod")),
                ("shop", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_orders", to="order_cycles.enterprise")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["shop", "schedule"], name="idx_standing_order_shop_sched")],
            },
        ),
        migrations.CreateModel(
            name="StandingLineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField()),
                ("standing_order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="standing_line_items", to="standing_orders.standingorder")),
                ("variant", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="standing_line_items", to="catalog.variant")),
            ],
            options={
                "ordering": ["id"],
                "constraints": [models.CheckConstraint(condition=models.Q(("quantity__gte", 1)), name="chk_standing_line_item_quantity_gte_1")],
            },
        ),
        migrations.CreateModel(
            name="StandingOrderOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("order", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="standing_order_link", to="checkout.order")),
                ("standing_order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="standing_order_orders", to="standing_orders.standingorder")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.AddField(
            model_name="standingorder",
            name="orders",
            field=models.ManyToManyField(blank=True, related_name="+", through="standing_orders.StandingOrderOrder", to="checkout.order"),
        ),
    ]
