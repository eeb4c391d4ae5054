import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Enterprise",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("is_producer", models.BooleanField(default=False)),
                ("is_distributor", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="OrderCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("orders_open_at", models.DateTimeField(blank=True, null=True)),
                ("orders_close_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("coordinator", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="coordinated_order_cycles", to="order_cycles.enterprise")),
            ],
            options={
                "ordering": ["-orders_open_at", "-id"],
                "indexes": [models.Index(fields=["orders_open_at", "orders_close_at"], name="idx_order_cycle_open_close")],
            },
        ),
        migrations.CreateModel(
            name="Schedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("order_cycles", models.ManyToManyField(blank=True, related_name="schedules", to="order_cycles.ordercycle")),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Exchange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("incoming", models.BooleanField(default=False)),
                ("order_cycle", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exchanges", to="order_cycles.ordercycle")),
                ("receiver", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="received_exchanges", to="order_cycles.enterprise")),
                ("sender", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="sent_exchanges", to="order_cycles.enterprise")),
            ],
            options={
                "ordering": ["order_cycle_id", "id"],
                "constraints": [models.UniqueConstraint(fields=("order_cycle", "sender", "receiver", "incoming"), name="uniq_exchange_per_direction")],
            },
        ),
    ]
