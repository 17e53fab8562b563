from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Role',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True, help_text='Inactive records are hidden from dropdowns and navigation')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(db_index=True, max_length=100, unique=True)),
                ('display_name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('permissions', models.JSONField(blank=True, default=list, help_text="Permission strings, e.g. ['ports:read', 'users-access:users:read,write']")),
            ],
            options={
                'verbose_name': 'Role',
                'verbose_name_plural': 'Roles',
                'db_table': 'roles',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Menu',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_active', models.BooleanField(default=True, help_text='Inactive records are hidden from dropdowns and navigation')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(db_index=True, help_text="Unique slug, also used in permission strings (e.g. 'users-access')", max_length=100, unique=True)),
                ('label', models.CharField(help_text='Text shown in navigation', max_length=255)),
                ('icon', models.CharField(blank=True, default='', max_length=100)),
                ('route', models.CharField(blank=True, default='', max_length=255)),
                ('sort_order', models.IntegerField(default=0)),
                ('menu_type', models.CharField(choices=[('glink', 'GLink'), ('plink', 'PLink')], default='glink', max_length=10)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='roles.menu')),
            ],
            options={
                'verbose_name': 'Menu',
                'verbose_name_plural': 'Menus',
                'db_table': 'menus',
                'ordering': ['sort_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='RoleCreationPermission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('allowed_user_types', models.JSONField(blank=True, default=list, help_text="User type names, e.g. ['port_user', 'terminal_user']")),
                ('is_active', models.BooleanField(default=True)),
                ('creator_role', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='creation_permission', to='roles.role')),
                ('allowed_roles', models.ManyToManyField(blank=True, related_name='assignable_by', to='roles.role')),
            ],
            options={
                'verbose_name': 'Role Creation Permission',
                'verbose_name_plural': 'Role Creation Permissions',
                'db_table': 'role_creation_permissions',
                'ordering': ['creator_role__name'],
            },
        ),
    ]
