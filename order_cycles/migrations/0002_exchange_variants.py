from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("catalog", "0001_initial"),
        ("order_cycles", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="exchange",
            name="variants",
            field=models.ManyToManyField(blank=True, related_name="exchanges", to="catalog.variant"),
        ),
    ]
