from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("order_cycles", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PaymentMethod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.SlugField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("kind", models.CharField(choices=[("offline", "Offline"), ("gateway", "Gateway"), ("cod", "Cash on delivery")], default="offline", max_length=20)),
                ("provider", models.CharField(blank=True, default="", max_length=50)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("instructions", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("distributors", models.ManyToManyField(blank=True, related_name="payment_methods", to="order_cycles.enterprise")),
            ],
            options={
                "ordering": ["sort_order", "code"],
                "indexes": [models.Index(fields=["code", "is_active"], name="idx_payment_method_code")],
            },
        ),
    ]
