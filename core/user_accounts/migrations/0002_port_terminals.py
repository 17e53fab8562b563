from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('user_accounts', '0001_initial'),
        ('ports', '0001_initial'),
        ('terminals', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='customuser',
            name='port',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='users', to='ports.port'),
        ),
        migrations.AddField(
            model_name='customuser',
            name='terminals',
            field=models.ManyToManyField(blank=True, related_name='users', to='terminals.terminal'),
        ),
    ]
