from django.conf import settings
from django.db import migrations


def point_site_at_domain(apps, schema_editor):
    # allauth builds its Google callback URLs from this Site row
    Site = apps.get_model('sites', 'Site')
    site, _ = Site.objects.get_or_create(pk=settings.SITE_ID, defaults={'domain': settings.SITE_DOMAIN})
    site.domain = settings.SITE_DOMAIN
    site.name = settings.SITE_NAME
    site.save()


class Migration(migrations.Migration):

    dependencies = [
        ('events', '0002_registration_payment'),
        ('sites', '0002_alter_domain_unique'),
    ]

    operations = [
        migrations.RunPython(point_site_at_domain, migrations.RunPython.noop),
    ]
