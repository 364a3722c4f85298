import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenants', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=200)),
                ('code', models.SlugField()),
                ('sku', models.CharField(blank=True, db_index=True, default='', max_length=64)),
                ('category', models.CharField(blank=True, max_length=120)),
                ('description', models.TextField(blank=True, default='')),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('published', models.BooleanField(default=True)),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tenants.tenant')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['tenant', 'name'], name='product_tenant_name_idx'),
                    models.Index(fields=['tenant', 'is_active'], name='product_tenant_active_idx'),
                    models.Index(fields=['tenant', 'category'], name='product_tenant_category_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(django.db.models.functions.text.Lower('code'), models.F('tenant'), name='uniq_product_code_ci_per_tenant'),
                    models.CheckConstraint(condition=models.Q(('code', ''), _negated=True), name='product_code_not_blank'),
                ],
            },
        ),
    ]
