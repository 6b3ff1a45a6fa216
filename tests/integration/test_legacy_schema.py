"""API behaviour on databases without orders.order_type / orders.payment_terms."""


class TestLegacySchemaApi:

    def test_flags_detected(self, legacy_app):
        flags = legacy_app.extensions['schema_flags']
        assert not flags.has_order_type
        assert not flags.has_payment_terms

    def test_create_ignores_missing_columns(self, legacy_client):
        response = legacy_client.post('/api/orders', json={
            'plate_num': 'ABC-123',
            'order_type': 'quick',
            'payment_terms': 'installments',
            'first_weight_kg': 3500,
            'second_weight_kg': 1000,
        })
        assert response.status_code == 201

        order = legacy_client.get(f"/api/orders/{response.get_json()['id']}").get_json()
        assert order['plate_num'] == 'ABC-123'
        assert order['net_weight_kg'] == 2500
        assert 'order_type' not in order
        assert 'payment_terms' not in order

    def test_list_with_order_type_filter(self, legacy_client):
        legacy_client.post('/api/orders', json={})
        response = legacy_client.get('/api/orders?order_type=quick')
        assert response.status_code == 200
        assert len(response.get_json()) == 1

    def test_patch_missing_column_only(self, legacy_client):
        created = legacy_client.post('/api/orders', json={}).get_json()

        response = legacy_client.patch(f"/api/orders/{created['id']}", json={'order_type': 'quick'})
        assert response.status_code == 400

        response = legacy_client.patch(
            f"/api/orders/{created['id']}", json={'order_type': 'quick', 'status': 'completed'}
        )
        assert response.status_code == 200
