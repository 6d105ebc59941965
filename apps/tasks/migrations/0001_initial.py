import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('households', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('category', models.CharField(choices=[('FINANCE', 'Finance'), ('LEGAL', 'Legal'), ('HOME', 'Home'), ('HEALTH', 'Health'), ('DIGITAL', 'Digital'), ('OTHER', 'Other')], default='OTHER', max_length=20)),
                ('schedule_type', models.CharField(choices=[('FIXED_DATE', 'One-time'), ('EVERY_N_MONTHS', 'Every N months'), ('YEARLY', 'Yearly on specific date')], default='FIXED_DATE', max_length=20)),
                ('schedule_value', models.PositiveIntegerField(blank=True, null=True)),
                ('next_due_date', models.DateTimeField(db_index=True)),
                ('last_completed_date', models.DateTimeField(blank=True, null=True)),
                ('completion_count', models.PositiveIntegerField(default=0)),
                ('notes', models.TextField(blank=True, max_length=1000, null=True)),
                ('cost', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('household', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='households.household')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['next_due_date'],
            },
        ),
    ]
