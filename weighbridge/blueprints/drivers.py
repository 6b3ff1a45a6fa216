"""Drivers API."""
from flask import Blueprint, request, jsonify
from weighbridge.database import get_session
from weighbridge.exceptions import ValidationError
from weighbridge.services.driver_service import list_drivers, search_drivers, upsert_driver

drivers_bp = Blueprint('drivers', __name__, url_prefix='/api/drivers')


@drivers_bp.route('', methods=['GET'])
def list_drivers_view():
    return jsonify([driver.to_dict() for driver in list_drivers(get_session())])


@drivers_bp.route('/search', methods=['GET'])
def search_drivers_view():
    """Search drivers for autocomplete (?q=substring)."""
    drivers = search_drivers(get_session(), request.args.get('q', ''))
    return jsonify([driver.to_dict() for driver in drivers])


@drivers_bp.route('', methods=['POST'])
def upsert_driver_view():
    """Create a driver or refresh the phone / last plate of an existing one."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('name required', payload={'field': 'name'})

    driver, outcome = upsert_driver(
        get_session(),
        data.get('name'),
        phone=data.get('phone'),
        last_plate=data.get('last_plate'),
    )
    return jsonify({**driver.to_dict(), 'outcome': outcome.value}), 201
