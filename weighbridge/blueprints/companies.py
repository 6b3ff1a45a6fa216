"""Companies API (customers and suppliers share one table)."""
from flask import Blueprint, request, jsonify
from weighbridge.database import get_session
from weighbridge.exceptions import ValidationError
from weighbridge.services.company_service import list_companies, search_companies, upsert_company

companies_bp = Blueprint('companies', __name__, url_prefix='/api/companies')


@companies_bp.route('', methods=['GET'])
def list_companies_view():
    return jsonify([company.to_dict() for company in list_companies(get_session())])


@companies_bp.route('/search', methods=['GET'])
def search_companies_view():
    """Search companies for autocomplete (?q=substring)."""
    companies = search_companies(get_session(), request.args.get('q', ''))
    return jsonify([company.to_dict() for company in companies])


@companies_bp.route('', methods=['POST'])
def upsert_company_view():
    """Find-or-create a company by name, refreshing its address if given."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('name required', payload={'field': 'name'})

    company, outcome = upsert_company(get_session(), data.get('name'), address=data.get('address'))
    return jsonify({**company.to_dict(), 'outcome': outcome.value}), 201
