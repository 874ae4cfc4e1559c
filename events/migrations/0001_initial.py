import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Display name of the event. Include the year if applicable.', max_length=200, unique=True)),
                ('slug', models.SlugField(help_text='Event slug. Name used in URLs.', max_length=100, unique=True)),
                ('year', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(2100)], verbose_name='Event year')),
                ('is_active', models.BooleanField(default=True, help_text='Whether this event is currently active and visible')),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Track',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Name of the track', max_length=100)),
                ('description', models.TextField(blank=True, default='', help_text='Description of the track')),
                ('event', models.ForeignKey(help_text='Event this track belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='tracks', to='events.event')),
            ],
            options={
                'verbose_name': 'Track',
                'verbose_name_plural': 'Tracks',
                'ordering': ['event', 'name'],
                'constraints': [models.UniqueConstraint(fields=('event', 'name'), name='unique_track_name_per_event')],
            },
        ),
    ]
