import pytest
from laptrack.models import db, Laptop, Assignment, Maintenance, Issue


def laptop_payload(**overrides):
    payload = {
        'brand': 'Lenovo',
        'model': 'ThinkPad X1',
        'serial_number': 'LN-1000',
        'purchase_date': '2024-03-01',
        'warranty_expiry': '2027-03-01',
        'processor': 'Intel i7',
        'ram': '32GB',
        'storage': '1TB SSD',
    }
    payload.update(overrides)
    return payload


class TestCreateLaptop:
    """Test POST /api/laptops"""

    def test_create_laptop(self, client, auth_headers):
        response = client.post('/api/laptops', json=laptop_payload(), headers=auth_headers)
        assert response.status_code == 201
        body = response.json
        assert body['id'] is not None
        assert body['serial_number'] == 'LN-1000'
        assert body['purchase_date'] == '2024-03-01'
        assert body['status'] == 'available'
        assert body['condition'] == 'good'
        assert body['created_at'] is not None

    def test_create_ignores_unknown_fields(self, client, auth_headers):
        response = client.post('/api/laptops', json=laptop_payload(owner='someone', id=999),
                               headers=auth_headers)
        assert response.status_code == 201
        assert 'owner' not in response.json
        assert response.json['id'] != 999

    def test_create_trims_strings(self, client, auth_headers):
        response = client.post('/api/laptops', json=laptop_payload(brand='  Lenovo  '),
                               headers=auth_headers)
        assert response.json['brand'] == 'Lenovo'

    def test_duplicate_serial_number(self, client, auth_headers, laptop):
        response = client.post('/api/laptops', json=laptop_payload(serial_number='DL-0001'),
                               headers=auth_headers)
        assert response.status_code == 409
        assert response.json['error'] == 'CONFLICT'
        assert Laptop.query.count() == 1

    def test_missing_required_fields(self, client, auth_headers):
        response = client.post('/api/laptops', json={'brand': 'Dell'}, headers=auth_headers)
        assert response.status_code == 400
        errors = response.json['errors']
        assert set(errors) == {'model', 'serial_number'}

    @pytest.mark.parametrize('field, value', [
        ('status', 'lost'),
        ('condition', 'mint'),
        ('purchase_date', '01/03/2024'),
        ('purchase_date', '2024-01-01garbage'),
        ('brand', 'x' * 101),
    ])
    def test_invalid_field_values(self, client, auth_headers, field, value):
        response = client.post('/api/laptops', json=laptop_payload(**{field: value}),
                               headers=auth_headers)
        assert response.status_code == 400
        assert field in response.json['errors']

    def test_requires_authentication(self, client, db_session):
        response = client.post('/api/laptops', json=laptop_payload())
        assert response.status_code == 401


class TestListLaptops:
    """Test GET /api/laptops"""

    @pytest.fixture
    def laptops(self, db_session):
        records = [
            Laptop(brand='Dell', model='XPS 13', serial_number='DL-1'),
            Laptop(brand='Dell', model='Latitude', serial_number='DL-2', status='maintenance'),
            Laptop(brand='Apple', model='MacBook Pro', serial_number='AP-1', condition='new'),
        ]
        db_session.add_all(records)
        db_session.commit()
        return records

    def test_list_all(self, client, auth_headers, laptops):
        response = client.get('/api/laptops', headers=auth_headers)
        assert response.status_code == 200
        body = response.json
        assert body['total'] == 3
        assert body['page'] == 1
        assert body['pages'] == 1
        assert [item['serial_number'] for item in body['items']] == ['DL-1', 'DL-2', 'AP-1']

    def test_filter_by_status(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?status=maintenance', headers=auth_headers)
        assert [item['serial_number'] for item in response.json['items']] == ['DL-2']

    def test_filter_by_brand_and_condition(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?brand=Apple&condition=new', headers=auth_headers)
        assert response.json['total'] == 1

    def test_search(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?search=macbook', headers=auth_headers)
        assert [item['serial_number'] for item in response.json['items']] == ['AP-1']

    def test_pagination(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?page=2&per_page=2', headers=auth_headers)
        body = response.json
        assert body['total'] == 3
        assert body['pages'] == 2
        assert body['per_page'] == 2
        assert len(body['items']) == 1

    def test_per_page_is_capped(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?per_page=5000', headers=auth_headers)
        assert response.json['per_page'] == 100

    def test_invalid_page(self, client, auth_headers, laptops):
        response = client.get('/api/laptops?page=0', headers=auth_headers)
        assert response.status_code == 400

    def test_empty_list(self, client, auth_headers):
        response = client.get('/api/laptops', headers=auth_headers)
        assert response.json['items'] == []
        assert response.json['total'] == 0


class TestSingleLaptop:
    """Test GET/PUT/DELETE /api/laptops/<id>"""

    def test_get_laptop(self, client, auth_headers, laptop):
        response = client.get(f'/api/laptops/{laptop.id}', headers=auth_headers)
        assert response.status_code == 200
        assert response.json['serial_number'] == 'DL-0001'

    def test_get_missing_laptop(self, client, auth_headers):
        response = client.get('/api/laptops/9999', headers=auth_headers)
        assert response.status_code == 404
        assert response.json['error'] == 'NOT_FOUND'
        assert response.json['message'] == 'Laptop not found'

    def test_update_laptop(self, client, auth_headers, laptop):
        response = client.put(f'/api/laptops/{laptop.id}',
                              json={'ram': '32GB', 'condition': 'fair'}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json['ram'] == '32GB'
        assert response.json['condition'] == 'fair'
        # untouched fields survive a partial update
        assert response.json['brand'] == 'Dell'

    def test_patch_clears_optional_field(self, client, auth_headers, laptop):
        response = client.patch(f'/api/laptops/{laptop.id}', json={'processor': None},
                                headers=auth_headers)
        assert response.status_code == 200
        assert response.json['processor'] is None

    def test_update_cannot_blank_required_field(self, client, auth_headers, laptop):
        response = client.put(f'/api/laptops/{laptop.id}', json={'brand': ''}, headers=auth_headers)
        assert response.status_code == 400
        assert 'brand' in response.json['errors']

    def test_update_serial_conflict(self, client, db_session, auth_headers, laptop):
        db_session.add(Laptop(brand='HP', model='EliteBook', serial_number='HP-1'))
        db_session.commit()
        response = client.put(f'/api/laptops/{laptop.id}', json={'serial_number': 'HP-1'},
                              headers=auth_headers)
        assert response.status_code == 409

    def test_update_same_serial_is_ok(self, client, auth_headers, laptop):
        response = client.put(f'/api/laptops/{laptop.id}', json={'serial_number': 'DL-0001'},
                              headers=auth_headers)
        assert response.status_code == 200

    def test_update_missing_laptop(self, client, auth_headers):
        response = client.put('/api/laptops/9999', json={'ram': '8GB'}, headers=auth_headers)
        assert response.status_code == 404

    def test_delete_laptop(self, client, admin_headers, laptop):
        response = client.delete(f'/api/laptops/{laptop.id}', headers=admin_headers)
        assert response.status_code == 200
        assert response.json['success'] is True
        assert client.get(f'/api/laptops/{laptop.id}', headers=admin_headers).status_code == 404

    def test_delete_assigned_laptop_refused(self, client, db_session, admin_headers, laptop, employee):
        db_session.add(Assignment(laptop_id=laptop.id, employee_id=employee.id))
        laptop.status = 'assigned'
        db_session.commit()

        response = client.delete(f'/api/laptops/{laptop.id}', headers=admin_headers)
        assert response.status_code == 409
        assert db.session.get(Laptop, laptop.id) is not None

    def test_delete_removes_history(self, client, db_session, admin_headers, laptop):
        db_session.add(Maintenance(laptop_id=laptop.id, maintenance_type='cleaning',
                                   description='Dust'))
        db_session.add(Issue(laptop_id=laptop.id, title='Fan', description='Noisy fan'))
        db_session.commit()

        response = client.delete(f'/api/laptops/{laptop.id}', headers=admin_headers)
        assert response.status_code == 200
        assert Maintenance.query.count() == 0
        assert Issue.query.count() == 0


class TestLaptopStatus:
    """Test which status changes PUT /api/laptops/<id> accepts"""

    @pytest.mark.parametrize('status', ['assigned', 'maintenance'])
    def test_create_with_workflow_status_refused(self, client, auth_headers, status):
        response = client.post('/api/laptops', json=laptop_payload(status=status), headers=auth_headers)
        assert response.status_code == 400
        assert 'status' in response.json['errors']
        assert Laptop.query.count() == 0

    @pytest.mark.parametrize('status', ['assigned', 'maintenance'])
    def test_update_to_workflow_status_refused(self, client, auth_headers, laptop, status):
        response = client.put(f'/api/laptops/{laptop.id}', json={'status': status}, headers=auth_headers)
        assert response.status_code == 400
        assert db.session.get(Laptop, laptop.id).status == 'available'

    def test_assigned_laptop_cannot_be_freed_by_hand(self, client, auth_headers, laptop, employee):
        response = client.post('/api/assignments', json={
            'laptop_id': laptop.id, 'employee_id': employee.id
        }, headers=auth_headers)
        assert response.status_code == 201

        response = client.put(f'/api/laptops/{laptop.id}', json={'status': 'available'},
                              headers=auth_headers)
        assert response.status_code == 409
        assert db.session.get(Laptop, laptop.id).status == 'assigned'

        # the laptop still cannot be handed out twice
        response = client.post('/api/assignments', json={
            'laptop_id': laptop.id, 'employee_id': employee.id
        }, headers=auth_headers)
        assert response.status_code == 409
        assert Assignment.query.count() == 1

    def test_laptop_in_maintenance_cannot_be_freed_by_hand(self, client, auth_headers, laptop):
        client.post('/api/maintenance', json={
            'laptop_id': laptop.id, 'maintenance_type': 'repair',
            'description': 'Screen', 'status': 'in_progress'
        }, headers=auth_headers)

        response = client.put(f'/api/laptops/{laptop.id}', json={'status': 'retired'},
                              headers=auth_headers)
        assert response.status_code == 409
        assert db.session.get(Laptop, laptop.id).status == 'maintenance'

    def test_unchanged_workflow_status_is_ok(self, client, db_session, auth_headers, laptop, employee):
        db_session.add(Assignment(laptop_id=laptop.id, employee_id=employee.id))
        laptop.status = 'assigned'
        db_session.commit()

        response = client.put(f'/api/laptops/{laptop.id}', json={'status': 'assigned', 'ram': '64GB'},
                              headers=auth_headers)
        assert response.status_code == 200
        assert response.json['ram'] == '64GB'

    def test_retire_and_restore_available_laptop(self, client, auth_headers, laptop):
        response = client.put(f'/api/laptops/{laptop.id}', json={'status': 'retired'}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json['status'] == 'retired'

        response = client.put(f'/api/laptops/{laptop.id}', json={'status': 'available'}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json['status'] == 'available'


class TestLaptopIds:
    """Ids outside the database integer range"""

    def test_get_out_of_range_id(self, client, auth_headers, laptop):
        response = client.get('/api/laptops/' + '9' * 30, headers=auth_headers)
        assert response.status_code == 404
        assert response.json['error'] == 'NOT_FOUND'

    def test_update_out_of_range_id(self, client, auth_headers, laptop):
        response = client.put(f'/api/laptops/{2 ** 63}', json={'ram': '8GB'}, headers=auth_headers)
        assert response.status_code == 404

    def test_page_out_of_range(self, client, auth_headers, laptop):
        response = client.get('/api/laptops?page=' + '9' * 30, headers=auth_headers)
        assert response.status_code == 400


class TestLaptopHistory:
    """Test GET /api/laptops/<id>/history"""

    def test_history(self, client, db_session, auth_headers, laptop, employee):
        db_session.add(Assignment(laptop_id=laptop.id, employee_id=employee.id))
        db_session.add(Maintenance(laptop_id=laptop.id, maintenance_type='repair',
                                   description='Keyboard'))
        db_session.add(Issue(laptop_id=laptop.id, title='Battery', description='Drains fast',
                             reported_by_id=employee.id))
        db_session.commit()

        response = client.get(f'/api/laptops/{laptop.id}/history', headers=auth_headers)
        assert response.status_code == 200
        body = response.json
        assert body['laptop']['id'] == laptop.id
        assert len(body['assignments']) == 1
        assert body['assignments'][0]['employee_name'] == 'Ada Lovelace'
        assert body['maintenance'][0]['maintenance_type'] == 'repair'
        assert body['issues'][0]['title'] == 'Battery'

    def test_history_missing_laptop(self, client, auth_headers):
        response = client.get('/api/laptops/9999/history', headers=auth_headers)
        assert response.status_code == 404
