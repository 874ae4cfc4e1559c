import datetime

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('events', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Talk',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Title of the talk', max_length=250)),
                ('description', models.TextField(blank=True, default='', help_text='Full description of the talk')),
                ('language', models.CharField(blank=True, default='', help_text='Language the talk is given in', max_length=50)),
                ('presentation_type', models.CharField(choices=[('Keynote', 'Keynote'), ('Lightning', 'Lightning Talk'), ('Panel', 'Panel'), ('Talk', 'Talk'), ('Tutorial', 'Tutorial'), ('Workshop', 'Workshop')], default='Talk', help_text='Type of the presentation', max_length=10)),
                ('start_time', models.DateTimeField(blank=True, help_text='Date and time when the talk is scheduled', null=True)),
                ('duration', models.DurationField(blank=True, default=datetime.timedelta(0), help_text='Duration of the talk')),
                ('stub', models.CharField(blank=True, editable=False, help_text='Short unique token used as a compact external identifier', max_length=32, null=True, unique=True)),
                ('slug', models.SlugField(blank=True, editable=False, help_text='URL-friendly title, unique within the event', max_length=300, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, help_text='When this talk was added to the system')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When this talk was last modified')),
                ('event', models.ForeignKey(help_text='Event this talk belongs to', on_delete=django.db.models.deletion.PROTECT, related_name='talks', to='events.event')),
            ],
            options={
                'verbose_name': 'Talk',
                'verbose_name_plural': 'Talks',
                'ordering': ['start_time'],
                'indexes': [models.Index(fields=['event', 'start_time'], name='talks_talk_event_start_idx')],
                'constraints': [models.UniqueConstraint(fields=('event', 'slug'), name='unique_talk_slug_per_event')],
            },
        ),
        migrations.CreateModel(
            name='TalkLinkType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('display_name', models.CharField(help_text="Name of the link type, e.g. 'slides_link'", max_length=50, unique=True)),
            ],
            options={
                'verbose_name': 'Talk link type',
                'verbose_name_plural': 'Talk link types',
                'ordering': ['display_name'],
            },
        ),
        migrations.CreateModel(
            name='TalkLink',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('url', models.URLField(help_text='Location of the media', max_length=500)),
                ('talk', models.ForeignKey(help_text='Talk the link belongs to', on_delete=django.db.models.deletion.PROTECT, related_name='links', to='talks.talk')),
                ('link_type', models.ForeignKey(help_text='Kind of media the link points to', on_delete=django.db.models.deletion.PROTECT, related_name='links', to='talks.talklinktype')),
            ],
            options={
                'verbose_name': 'Talk link',
                'verbose_name_plural': 'Talk links',
                'ordering': ['talk', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='TalkSpeaker',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('speaker_name', models.CharField(blank=True, default='', help_text='Name of the speaker as entered on the talk', max_length=200)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, help_text='When the speaker was attached to the talk')),
                ('talk', models.ForeignKey(help_text='Talk the speaker gives', on_delete=django.db.models.deletion.PROTECT, related_name='talk_speakers', to='talks.talk')),
                ('user', models.ForeignKey(blank=True, help_text='Account that claimed this speaker slot', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='talk_speakers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Talk speaker',
                'verbose_name_plural': 'Talk speakers',
                'ordering': ['talk', 'pk'],
                'indexes': [models.Index(fields=['talk', 'speaker_name'], name='talks_speaker_talk_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='TalkTrack',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('talk', models.ForeignKey(help_text='Talk in the track', on_delete=django.db.models.deletion.PROTECT, related_name='talk_tracks', to='talks.talk')),
                ('track', models.ForeignKey(help_text='Track the talk belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='talk_tracks', to='events.track')),
            ],
            options={
                'verbose_name': 'Talk track',
                'verbose_name_plural': 'Talk tracks',
                'constraints': [models.UniqueConstraint(fields=('talk', 'track'), name='unique_talk_track')],
            },
        ),
    ]
