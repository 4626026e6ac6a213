from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from accounts.models import AmbassadorApplication, Perk, Resource


def college_id(content_type='image/png'):
    return SimpleUploadedFile('id.png', b'\x89PNG0000', content_type=content_type)


def onboarding_data(**overrides):
    data = {
        'name': 'Asha Rao',
        'college': 'REC',
        'year': '2',
        'student_id_number': '21CS042',
        'domains': ['web-dev', 'ai-ml'],
        'primary_domain': 'web-dev',
        'college_id_file': college_id(),
    }
    data.update(overrides)
    return data


def test_dashboard_sends_new_users_to_onboarding(student_client, student):
    student.onboarding_completed = False
    student.save()

    response = student_client.get(reverse('dashboard'))

    assert response.status_code == 302
    assert response.url == reverse('onboarding')


def test_admin_dashboard_shows_notice(admin_client):
    response = admin_client.get(reverse('dashboard'))

    assert response.status_code == 200
    assert b'administrator' in response.content


def test_onboarding_completes_profile(student_client, student, fake_upload):
    student.onboarding_completed = False
    student.save()

    response = student_client.post(reverse('onboarding'), onboarding_data())

    assert response.status_code == 302
    student.refresh_from_db()
    assert student.onboarding_completed
    assert student.points == 25
    assert student.badges == ['First Steps']
    assert student.domains == ['web-dev', 'ai-ml']
    assert student.verification_status == 'pending'
    assert fake_upload.call_args.kwargs['folder'] == f"college-ids/{student.pk}"
    assert student.college_id.public_id == f"college-ids/{student.pk}/id"


def test_onboarding_validation(student_client, student, fake_upload):
    student.onboarding_completed = False
    student.save()

    response = student_client.post(reverse('onboarding'), onboarding_data(primary_domain='cybersecurity'))
    assert 'primary_domain' in response.context['form'].errors

    too_many = ['web-dev', 'ai-ml', 'data-science', 'cybersecurity']
    response = student_client.post(reverse('onboarding'), onboarding_data(domains=too_many))
    assert 'domains' in response.context['form'].errors

    response = student_client.post(reverse('onboarding'), onboarding_data(college_id_file=college_id('text/plain')))
    assert 'college_id_file' in response.context['form'].errors

    fake_upload.assert_not_called()
    student.refresh_from_db()
    assert student.points == 0


def test_completed_onboarding_redirects(student_client):
    response = student_client.get(reverse('onboarding'))
    assert response.url == reverse('dashboard')


def test_requests_update_streak(student_client, student):
    student_client.get(reverse('profile'))
    student.refresh_from_db()
    assert student.streak == 1
    assert student.last_active_date is not None


def test_profile_shows_campus_rank(student_client, student):
    response = student_client.get(reverse('profile'))
    assert response.context['campus_rank'] == 1


def test_perks_unlock_by_tier(student_client, student):
    Perk.objects.create(title='Stickers', description='Laptop stickers', tier='Bronze')
    Perk.objects.create(title='Mentor call', description='1:1 with a mentor', tier='Silver')
    student.points = 300
    student.save()

    response = student_client.get(reverse('perks'))

    unlocked = {item['perk'].title: item['unlocked'] for item in response.context['perks']}
    assert unlocked == {'Stickers': True, 'Mentor call': True}

    student.points = 10
    student.save()
    response = student_client.get(reverse('perks'))
    unlocked = {item['perk'].title: item['unlocked'] for item in response.context['perks']}
    assert unlocked == {'Stickers': True, 'Mentor call': False}


def test_resources_grouped_by_category(student_client):
    Resource.objects.create(title='MDN Guide', category='Docs', domain='web-dev', url='https://developer.mozilla.org')
    Resource.objects.create(title='CSS Tricks', category='Articles', domain='web-dev', url='https://css-tricks.com')
    Resource.objects.create(title='fast.ai', category='Courses', domain='ai-ml', url='https://fast.ai')

    response = student_client.get(reverse('resources'))
    grouped = dict(response.context['grouped_resources'])
    assert set(grouped) == {'Docs', 'Articles'}

    response = student_client.get(reverse('resources'), {'q': 'mdn'})
    grouped = dict(response.context['grouped_resources'])
    assert [r.title for r in grouped['Docs']] == ['MDN Guide']
    assert 'Articles' not in grouped


def test_ambassador_application_once(student_client, student):
    data = {'why': 'I love community', 'what': 'Run study jams', 'experience': 'GDSC lead'}

    response = student_client.post(reverse('ambassador_apply'), data)
    assert response.status_code == 302
    assert AmbassadorApplication.objects.get(user=student).status == 'pending'

    response = student_client.get(reverse('ambassador_apply'))
    assert response.context['application'].user == student
    assert 'form' not in response.context
