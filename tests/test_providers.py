import pytest
from cloudinary.exceptions import Error as CloudinaryError
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.notifications.models import Notification
from apps.providers.models import ProviderApplication

pytestmark = pytest.mark.django_db
User = get_user_model()

APPLY_URL = '/api/providers/apply/'


@pytest.fixture
def fake_upload(monkeypatch):
    calls = []

    def upload(file, **options):
        calls.append(options)
        return {'secure_url': f"https://res.cloudinary.com/test/{options['folder']}/{options['public_id']}"}

    monkeypatch.setattr('cloudinary.uploader.upload', upload)
    return calls


def _pdf(name='reg.pdf'):
    return SimpleUploadedFile(name, b'%PDF-1.4 test', content_type='application/pdf')


def _apply(client, **extra):
    data = {'business_reg_file': _pdf(), 'memo': 'Kitchen specialist'}
    data.update(extra)
    return client.post(APPLY_URL, data, format='multipart')


def test_apply_uploads_and_moves_to_review(client_for, alice, fake_upload):
    res = _apply(client_for(alice))

    assert res.status_code == 201
    alice.refresh_from_db()
    assert alice.provider_status == User.PROVIDER_REVIEWING

    application = ProviderApplication.objects.get(applicant=alice)
    assert application.status == ProviderApplication.STATUS_PENDING
    assert application.business_reg.startswith('https://res.cloudinary.com/test/business_reg/')
    assert fake_upload[0]['folder'] == f"business_reg/{alice.id}"


def test_apply_twice_is_rejected(client_for, alice, fake_upload):
    client = client_for(alice)
    _apply(client)

    res = _apply(client)

    assert res.status_code == 400
    assert ProviderApplication.objects.count() == 1


def test_apply_rejects_unsupported_file(client_for, alice, fake_upload):
    text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')

    res = _apply(client_for(alice), business_reg_file=text)

    assert res.status_code == 400
    assert fake_upload == []
    alice.refresh_from_db()
    assert alice.provider_status == User.PROVIDER_NONE


def test_apply_upload_failure_leaves_status_unchanged(client_for, alice, monkeypatch):
    def broken(file, **options):
        raise CloudinaryError("Invalid cloud_name")

    monkeypatch.setattr('cloudinary.uploader.upload', broken)

    res = _apply(client_for(alice))

    assert res.status_code == 500
    assert res.data['message'] == "Invalid cloud_name"
    assert not ProviderApplication.objects.exists()


def test_provider_status_view(client_for, alice, fake_upload):
    client = client_for(alice)
    before = client.get('/api/providers/me/')
    assert before.data['can_apply'] is True
    assert before.data['application'] is None

    _apply(client)
    after = client.get('/api/providers/me/')
    assert after.data['provider_status'] == User.PROVIDER_REVIEWING
    assert after.data['can_apply'] is False
    assert after.data['application']['status'] == ProviderApplication.STATUS_PENDING


def test_manager_console_requires_manager(client_for, alice):
    client = client_for(alice)
    assert client.get('/api/manage/summary/').status_code == 403
    assert client.get('/api/manage/applicants/').status_code == 403


def test_manager_lists_pending_applicants(client_for, manager, alice, bob, fake_upload):
    _apply(client_for(alice), memo='kitchens')
    _apply(client_for(bob), memo='offices')
    client = client_for(manager)

    assert client.get('/api/manage/summary/').data['pending_applications'] == 2

    res = client.get('/api/manage/applicants/', {'search': 'kitchen'})
    assert res.data['count'] == 1
    assert res.data['results'][0]['applicant']['id'] == alice.id


def test_approve_application(client_for, manager, alice, fake_upload):
    _apply(client_for(alice))
    application = ProviderApplication.objects.get(applicant=alice)

    res = client_for(manager).post(f'/api/manage/applicants/{application.id}/approve/')

    assert res.status_code == 200
    application.refresh_from_db()
    alice.refresh_from_db()
    assert application.status == ProviderApplication.STATUS_APPROVED
    assert application.reviewed_by == manager
    assert alice.provider_status == User.PROVIDER_APPROVED
    assert Notification.unread_count(alice) == 1

    again = client_for(manager).post(f'/api/manage/applicants/{application.id}/approve/')
    assert again.status_code == 404


def test_reject_application(client_for, manager, alice, fake_upload):
    _apply(client_for(alice))
    application = ProviderApplication.objects.get(applicant=alice)

    res = client_for(manager).post(f'/api/manage/applicants/{application.id}/reject/')

    assert res.status_code == 200
    alice.refresh_from_db()
    assert alice.provider_status == User.PROVIDER_REJECTED
    assert Notification.objects.get(user=alice).kind == 'application'
