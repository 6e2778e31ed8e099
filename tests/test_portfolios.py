import pytest

from apps.portfolios.models import Portfolio, PortfolioImage
from apps.stores.models import Store

pytestmark = pytest.mark.django_db

URL = '/api/portfolios/'


@pytest.fixture
def store(provider):
    return Store.objects.create(owner=provider, name='Han Interiors', is_published=True)


def test_owner_creates_portfolio_with_gallery(client_for, provider, store):
    payload = {
        'store_id': store.id,
        'project_title': ' 34py apartment remodel ',
        'type': 'apartment',
        'area': '34.50',
        'tags': ['modern', 'white'],
        'content': '<p>Full remodel</p>',
        'images': ['https://cdn.example.com/a.jpg', 'https://cdn.example.com/b.jpg'],
    }

    res = client_for(provider).post(URL, payload, format='json')

    assert res.status_code == 201
    portfolio = Portfolio.objects.get(id=res.data['id'])
    assert portfolio.project_title == '34py apartment remodel'
    assert list(portfolio.images.values_list('url', flat=True)) == payload['images']
    assert res.data['portfolio']['store_name'] == 'Han Interiors'
    assert res.data['portfolio']['owner_id'] == provider.id


def test_cannot_create_in_someone_elses_store(client_for, alice, store):
    res = client_for(alice).post(URL, {'store_id': store.id, 'project_title': 'x'}, format='json')

    assert res.status_code == 403
    assert not Portfolio.objects.exists()


def test_create_validates_required_fields(client_for, provider, store):
    client = client_for(provider)

    assert client.post(URL, {'project_title': 'x'}, format='json').status_code == 400
    assert client.post(URL, {'store_id': store.id, 'project_title': '  '}, format='json').status_code == 400
    assert client.post(URL, {'store_id': 999, 'project_title': 'x'}, format='json').status_code == 400


def test_list_requires_store_param(api_client):
    assert api_client.get(URL).status_code == 400
    assert api_client.get(URL, {'store': 999}).status_code == 404


def test_list_hides_drafts_from_visitors(api_client, client_for, provider, store):
    Portfolio.objects.create(store=store, project_title='Visible')
    Portfolio.objects.create(store=store, project_title='Draft', published=False)

    public = api_client.get(URL, {'store': store.id})
    own = client_for(provider).get(URL, {'store': store.id})

    assert [p['project_title'] for p in public.data['portfolios']] == ['Visible']
    assert len(own.data['portfolios']) == 2


def test_draft_detail_is_hidden_from_visitors(api_client, client_for, provider, store):
    draft = Portfolio.objects.create(store=store, project_title='Draft', published=False)

    assert api_client.get(f'{URL}{draft.id}/').status_code == 404
    assert client_for(provider).get(f'{URL}{draft.id}/').status_code == 200


def test_update_replaces_gallery(client_for, provider, store):
    portfolio = Portfolio.objects.create(store=store, project_title='Old')
    PortfolioImage.objects.create(portfolio=portfolio, url='https://cdn.example.com/old.jpg')

    res = client_for(provider).patch(
        f'{URL}{portfolio.id}/',
        {'project_title': 'New', 'images': ['https://cdn.example.com/new.jpg']},
        format='json',
    )

    assert res.status_code == 200
    assert res.data['portfolio']['project_title'] == 'New'
    assert [i['url'] for i in res.data['portfolio']['images']] == ['https://cdn.example.com/new.jpg']


def test_update_without_images_keeps_gallery(client_for, provider, store):
    portfolio = Portfolio.objects.create(store=store, project_title='Old')
    PortfolioImage.objects.create(portfolio=portfolio, url='https://cdn.example.com/keep.jpg')

    client_for(provider).patch(f'{URL}{portfolio.id}/', {'style': 'minimal'}, format='json')

    assert portfolio.images.count() == 1


def test_portfolio_cannot_move_store(client_for, provider, store, user_factory):
    other = Store.objects.create(owner=user_factory('rival'), name='Rival')
    portfolio = Portfolio.objects.create(store=store, project_title='Mine')

    res = client_for(provider).patch(f'{URL}{portfolio.id}/', {'store_id': other.id}, format='json')

    assert res.status_code == 400


def test_only_owner_or_manager_can_edit_and_delete(client_for, alice, manager, store):
    portfolio = Portfolio.objects.create(store=store, project_title='Target')
    url = f'{URL}{portfolio.id}/'

    assert client_for(alice).patch(url, {'project_title': 'Hacked'}, format='json').status_code == 403
    assert client_for(alice).delete(url).status_code == 403

    assert client_for(manager).delete(url).status_code == 200
    assert not Portfolio.objects.exists()
    assert client_for(manager).delete(url).status_code == 404
