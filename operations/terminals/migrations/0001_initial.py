from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('ports', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SubscriptionType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('months', models.PositiveSmallIntegerField(choices=[(1, '1 Month'), (12, '12 Months'), (24, '24 Months'), (48, '48 Months')], unique=True)),
            ],
            options={
                'verbose_name': 'Subscription Type',
                'verbose_name_plural': 'Subscription Types',
                'db_table': 'subscription_types',
                'ordering': ['months'],
            },
        ),
        migrations.CreateModel(
            name='Terminal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('terminal_name', models.CharField(max_length=255)),
                ('short_code', models.CharField(max_length=6, unique=True)),
                ('gst', models.CharField(blank=True, default='', max_length=15)),
                ('pan', models.CharField(blank=True, default='', max_length=10)),
                ('currency', models.CharField(default='INR', max_length=3)),
                ('timezone', models.CharField(default='Asia/Kolkata', max_length=50)),
                ('billing_address', models.TextField()),
                ('billing_city', models.CharField(max_length=100)),
                ('billing_pin_code', models.CharField(max_length=10)),
                ('billing_phone', models.CharField(blank=True, default='', max_length=20)),
                ('billing_fax', models.CharField(blank=True, default='', max_length=20)),
                ('same_as_billing', models.BooleanField(default=False)),
                ('shipping_address', models.TextField(blank=True, default='')),
                ('shipping_city', models.CharField(blank=True, default='', max_length=100)),
                ('shipping_pin_code', models.CharField(blank=True, default='', max_length=10)),
                ('shipping_phone', models.CharField(blank=True, default='', max_length=20)),
                ('shipping_fax', models.CharField(blank=True, default='', max_length=20)),
                ('status', models.CharField(choices=[('Processing for activation', 'Processing for activation'), ('Active', 'Active'), ('Suspended', 'Suspended')], db_index=True, default='Processing for activation', max_length=30)),
                ('is_active', models.BooleanField(default=False)),
                ('activation_start_date', models.DateField(blank=True, null=True)),
                ('activation_end_date', models.DateField(blank=True, null=True)),
                ('work_order_no', models.CharField(blank=True, default='', max_length=100)),
                ('work_order_date', models.DateField(blank=True, null=True)),
                ('suspension_remarks', models.TextField(blank=True, default='')),
                ('created_by', models.ForeignKey(blank=True, help_text='User who created this record', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='terminals_terminal_created', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, help_text='User who last updated this record', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='terminals_terminal_updated', to=settings.AUTH_USER_MODEL)),
                ('port', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='terminals', to='ports.port')),
                ('subscription_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='terminals', to='terminals.subscriptiontype')),
            ],
            options={
                'verbose_name': 'Terminal',
                'verbose_name_plural': 'Terminals',
                'db_table': 'terminals',
                'ordering': ['terminal_name'],
            },
        ),
        migrations.CreateModel(
            name='ActivationLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('created', 'Created'), ('activated', 'Activated'), ('suspended', 'Suspended')], max_length=20)),
                ('description', models.TextField(blank=True, default='')),
                ('data', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='terminal_activation_logs', to=settings.AUTH_USER_MODEL)),
                ('terminal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activation_logs', to='terminals.terminal')),
            ],
            options={
                'verbose_name': 'Activation Log',
                'verbose_name_plural': 'Activation Logs',
                'db_table': 'terminal_activation_logs',
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
