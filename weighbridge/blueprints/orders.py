"""Orders API: gate and management clients read and write orders here."""
from flask import Blueprint, request, jsonify, current_app
from weighbridge.database import get_session
from weighbridge.exceptions import ValidationError
from weighbridge.services.order_service import upsert_order, patch_order, delete_order
from weighbridge.services.order_query_service import list_orders, get_order
from weighbridge.blueprints.metrics import orders_upserted_total

orders_bp = Blueprint('orders', __name__, url_prefix='/api/orders')


def _schema_flags():
    return current_app.extensions['schema_flags']


def _json_body() -> dict:
    """Request JSON object; an empty body counts as {}."""
    if not request.get_data():
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('request body must be a JSON object')
    return data


@orders_bp.route('', methods=['GET'])
def list_orders_view():
    """List orders (?status=pending|completed, ?order_type=regular|quick)."""
    rows = list_orders(
        get_session(),
        _schema_flags(),
        status=request.args.get('status'),
        order_type=request.args.get('order_type'),
        limit=current_app.config.get('ORDERS_LIST_LIMIT', 200),
    )
    return jsonify(rows)


@orders_bp.route('/<id_or_number>', methods=['GET'])
def get_order_view(id_or_number: str):
    """Fetch one order by id (42) or order number (ORD-0042)."""
    return jsonify(get_order(get_session(), _schema_flags(), id_or_number))


@orders_bp.route('', methods=['POST'])
def create_order():
    """Create an order, or overwrite the one with the same order_number."""
    result = upsert_order(
        get_session(),
        _json_body(),
        _schema_flags(),
        current_app.extensions['order_number_allocator'],
    )
    orders_upserted_total.labels(outcome=result.outcome.value).inc()
    return jsonify(result.to_dict()), 201


@orders_bp.route('/<int:order_id>', methods=['PATCH'])
def update_order(order_id: int):
    """Sparse update: only the fields present in the body are written."""
    patch_order(get_session(), order_id, _json_body(), _schema_flags())
    return jsonify({'ok': True})


@orders_bp.route('/<int:order_id>', methods=['DELETE'])
def remove_order(order_id: int):
    delete_order(get_session(), order_id)
    return jsonify({'ok': True})
