from django.db import migrations


LINK_TYPES = (
    "slides_link",
    "video_link",
    "audio_link",
    "code_link",
    "joindin_link",
)


def seed_link_types(apps, schema_editor):
    TalkLinkType = apps.get_model("talks", "TalkLinkType")
    for display_name in LINK_TYPES:
        TalkLinkType.objects.get_or_create(display_name=display_name)


def remove_link_types(apps, schema_editor):
    TalkLinkType = apps.get_model("talks", "TalkLinkType")
    TalkLinkType.objects.filter(display_name__in=LINK_TYPES, links__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('talks', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_link_types, remove_link_types),
    ]
