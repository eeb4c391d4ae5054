from django.db import migrations

TEMPLATES = [
    {
        "key": "checkout_order_confirmation",
        "name": "Order confirmation",
        "subject": "Order #{{ order_id }} confirmed",
        "body_text": (
            "Thank you for your order at {{ shop_name }}.\n"
            "{% for line in lines %}{{ line.name }} x{{ line.qty }}: {{ line.total }} {{ currency }}\n{% endfor %}"
            "Total: {{ total }} {{ currency }}\n"
        ),
    },
    {
        "key": "standing_order_placement",
        "name": "Standing order placed",
        "subject": "Your subscription order #{{ order_id }} has been placed",
        "body_text": (
            "Your regular order from {{ shop_name }} has been placed.\n"
            "{% for line in lines %}{{ line.name }} x{{ line.qty }}: {{ line.total }} {{ currency }}\n{% endfor %}"
            "Total: {{ total }} {{ currency }}\n"
        ),
    },
    {
        "key": "standing_order_placement_capped",
        "name": "Standing order placed (items capped)",
        "subject": "Your subscription order #{{ order_id }} has been placed with changes",
        "body_text": (
            "Your regular order from {{ shop_name }} has been placed, but some items "
            "were not available in the quantity you asked for:\n"
            "{% for c in changes %}{{ c.name }}: {{ c.original_qty }} requested, {{ c.qty }} available\n{% endfor %}"
            "\n"
            "{% for line in lines %}{{ line.name }} x{{ line.qty }}: {{ line.total }} {{ currency }}\n{% endfor %}"
            "Total: {{ total }} {{ currency }}\n"
        ),
    },
    {
        "key": "standing_order_failure",
        "name": "Standing order failed",
        "subject": "We could not place your subscription order #{{ order_id }}",
        "body_text": (
            "Your regular order from {{ shop_name }} could not be placed: {{ error }}\n"
            "Please contact {{ support_email }}.\n"
        ),
    },
]


def seed_order_templates(apps, schema_editor):
    EmailTemplate = apps.get_model("notifications", "EmailTemplate")

    for tmpl in TEMPLATES:
        EmailTemplate.objects.update_or_create(
            key=tmpl["key"],
            language_code="en",
            defaults={
                "name": tmpl["name"],
                "subject": tmpl["subject"],
                "body_text": tmpl["body_text"],
                "body_html": "",
                "is_active": True,
            },
        )


class Migration(migrations.Migration):
    dependencies = [
        ("notifications", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_order_templates,
                             migrations.RunPython.noop),
    ]
