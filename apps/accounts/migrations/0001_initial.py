import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('resident_id', models.CharField(blank=True, max_length=50, validators=[django.core.validators.RegexValidator(message='Resident ID may only contain letters, digits and hyphens.', regex='^[A-Za-z0-9\\-]+$')], verbose_name='Resident permit number')),
                ('middle_initial', models.CharField(blank=True, max_length=1)),
                ('phone', models.CharField(blank=True, max_length=20, validators=[django.core.validators.RegexValidator(message='Enter a valid phone number.', regex='^[0-9\\-\\+\\(\\)\\s]+$')])),
                ('address_line1', models.CharField(blank=True, max_length=200)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('postal_code', models.CharField(blank=True, max_length=20)),
                ('country', models.CharField(blank=True, default='Honduras', max_length=100)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'profiles',
                'constraints': [models.UniqueConstraint(condition=models.Q(('resident_id', ''), _negated=True), fields=('resident_id',), name='unique_profile_resident_id')],
            },
        ),
    ]
