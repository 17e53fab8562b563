from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('terminals', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', help_text='Record status. Set to INACTIVE instead of deleting.', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('customer_code', models.CharField(max_length=50, unique=True)),
                ('customer_name', models.CharField(max_length=255)),
                ('display_name', models.CharField(max_length=255)),
                ('email', models.EmailField(max_length=254)),
                ('pan', models.CharField(blank=True, default='', max_length=10)),
                ('gst', models.CharField(blank=True, default='', max_length=15)),
                ('country', models.CharField(max_length=100)),
                ('state', models.CharField(max_length=100)),
                ('terminal', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='customers', to='terminals.terminal')),
            ],
            options={
                'verbose_name': 'Customer',
                'verbose_name_plural': 'Customers',
                'db_table': 'customers',
                'ordering': ['customer_name'],
            },
        ),
        migrations.CreateModel(
            name='Contract',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('contract_number', models.CharField(max_length=100, unique=True)),
                ('contract_copy_url', models.URLField(blank=True, default='', max_length=500)),
                ('valid_from', models.DateField()),
                ('valid_to', models.DateField()),
                ('is_active', models.BooleanField(default=True)),
                ('created_by', models.ForeignKey(blank=True, help_text='User who created this record', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='contracts_contract_created', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, help_text='User who last updated this record', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='contracts_contract_updated', to=settings.AUTH_USER_MODEL)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='contracts', to='contracts.customer')),
                ('renewed_from', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='renewals', to='contracts.contract')),
            ],
            options={
                'verbose_name': 'Contract',
                'verbose_name_plural': 'Contracts',
                'db_table': 'contracts',
                'ordering': ['-valid_from', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ContractTariff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('service', models.CharField(max_length=255)),
                ('chc_rate_to_customer', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('chc_rate_to_port', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('bhc_rate_to_customer', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('bhc_rate_to_port', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('contract', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tariffs', to='contracts.contract')),
            ],
            options={
                'db_table': 'contract_tariffs',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='ContractCargoDetail',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('cargo_type', models.CharField(max_length=255)),
                ('expected_cargo_per_year', models.DecimalField(decimal_places=2, default=0, help_text='Expected volume in metric tonnes', max_digits=14)),
                ('assigned_plots', models.JSONField(blank=True, default=list)),
                ('contract', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cargo_details', to='contracts.contract')),
            ],
            options={
                'db_table': 'contract_cargo_details',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='ContractStorageCharge',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('storage_free_time', models.PositiveIntegerField(help_text='Free storage in days')),
                ('charge_per_day', models.DecimalField(decimal_places=2, max_digits=12)),
                ('charge_applicable_days', models.PositiveIntegerField()),
                ('contract', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='storage_charges', to='contracts.contract')),
            ],
            options={
                'db_table': 'contract_storage_charges',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='ContractSpecialCondition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('condition', models.TextField()),
                ('contract', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='special_conditions', to='contracts.contract')),
            ],
            options={
                'db_table': 'contract_special_conditions',
                'ordering': ['id'],
            },
        ),
    ]
