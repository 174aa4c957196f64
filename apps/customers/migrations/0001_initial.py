from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('total_spend', models.FloatField(default=0)),
                ('num_visits', models.PositiveIntegerField(default=0)),
                ('last_visit_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['total_spend'], name='customer_total_spend_idx'),
                    models.Index(fields=['last_visit_date'], name='customer_last_visit_idx'),
                ],
            },
        ),
    ]
