import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenants', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DiscountRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=80)),
                ('code', models.SlugField()),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('description', models.TextField(blank=True, default='')),
                ('basis', models.CharField(choices=[('PCT', 'Percent'), ('FLAT', 'Flat amount')], default='PCT', max_length=8)),
                ('rate', models.DecimalField(blank=True, decimal_places=4, max_digits=6, null=True)),
                ('amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('priority', models.PositiveIntegerField(db_index=True, default=100)),
                ('start_at', models.DateTimeField(blank=True, null=True)),
                ('end_at', models.DateTimeField(blank=True, null=True)),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tenants.tenant')),
            ],
            options={
                'ordering': ['priority', 'id'],
                'indexes': [models.Index(fields=['tenant', 'is_active', 'priority'], name='discount_tenant_active_idx')],
                'unique_together': {('tenant', 'code')},
            },
        ),
        migrations.CreateModel(
            name='DiscountRequirement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('rule_system_name', models.CharField(db_index=True, max_length=120)),
                ('discount', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requirements', to='discounts.discountrule')),
            ],
            options={
                'ordering': ['discount_id', 'id'],
            },
        ),
    ]
