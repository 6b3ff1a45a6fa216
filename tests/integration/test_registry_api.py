"""Drivers and companies API integration tests."""
import pytest


class TestDriversApi:
    """/api/drivers"""

    def test_upsert_and_list(self, client):
        created = client.post('/api/drivers', json={'name': 'Omar Haddad', 'phone': '+20 100'})
        assert created.status_code == 201
        assert created.get_json()['outcome'] == 'created'

        updated = client.post('/api/drivers', json={'name': 'omar haddad', 'last_plate': 'XYZ-789'})
        assert updated.status_code == 201
        data = updated.get_json()
        assert data['outcome'] == 'updated'
        assert data['id'] == created.get_json()['id']
        assert data['name'] == 'Omar Haddad'
        assert data['phone'] == '+20 100'
        assert data['last_plate'] == 'XYZ-789'

        drivers = client.get('/api/drivers').get_json()
        assert len(drivers) == 1

    def test_search(self, client):
        for name in ('Omar Haddad', 'Sami Nasser'):
            client.post('/api/drivers', json={'name': name})

        assert [d['name'] for d in client.get('/api/drivers/search?q=sam').get_json()] == ['Sami Nasser']
        assert client.get('/api/drivers/search').get_json() == []

    @pytest.mark.parametrize('body', [{}, {'name': '  '}, {'phone': '+20 100'}])
    def test_name_required(self, client, body):
        response = client.post('/api/drivers', json=body)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'name required'

    def test_non_text_phone(self, client):
        response = client.post('/api/drivers', json={'name': 'Omar Haddad', 'phone': ['+20 100']})
        assert response.status_code == 400
        assert client.get('/api/drivers').get_json() == []

    def test_non_object_body(self, client):
        response = client.post('/api/drivers', data='Omar', content_type='text/plain')
        assert response.status_code == 400


class TestCompaniesApi:
    """/api/companies"""

    def test_upsert_and_list(self, client):
        created = client.post('/api/companies', json={'name': 'Acme Co', 'address': '12 Mill Road'})
        assert created.status_code == 201
        assert created.get_json() == {
            'id': created.get_json()['id'],
            'name': 'Acme Co',
            'address': '12 Mill Road',
            'outcome': 'created',
        }

        again = client.post('/api/companies', json={'name': 'ACME CO'}).get_json()
        assert again['outcome'] == 'updated'
        assert again['address'] == '12 Mill Road'

        assert [c['name'] for c in client.get('/api/companies').get_json()] == ['Acme Co']

    def test_search(self, client):
        for name in ('Acme Co', 'Delta Farms'):
            client.post('/api/companies', json={'name': name})
        assert [c['name'] for c in client.get('/api/companies/search?q=DELTA').get_json()] == ['Delta Farms']

    def test_name_required(self, client):
        response = client.post('/api/companies', json={'address': 'Route 5'})
        assert response.status_code == 400
        assert response.get_json()['field'] == 'name'
