"""Company service: customer/supplier lookup and find-or-create."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from weighbridge.exceptions import ValidationError
from weighbridge.models import Company
from weighbridge.services.outcome import UpsertOutcome
from weighbridge.utils.text import clean_text

logger = logging.getLogger(__name__)


def list_companies(session) -> List[Company]:
    """All companies, alphabetically."""
    return session.query(Company).order_by(Company.name).all()


def search_companies(session, query: str, limit: int = 10) -> List[Company]:
    """Case-insensitive substring search on name (autocomplete)."""
    query = (query or '').strip()
    if not query:
        return []
    return session.query(Company).filter(
        func.lower(Company.name).contains(query.lower(), autoescape=True)
    ).order_by(Company.name).limit(limit).all()


def find_company_by_name(session, name: str) -> Optional[Company]:
    """Exact match ignoring case: 'acme co' finds 'Acme Co'."""
    name = clean_text(name)
    if not name:
        return None
    return session.query(Company).filter(func.lower(Company.name) == name.lower()).first()


def upsert_company(session, name: str, address: Optional[str] = None) -> Tuple[Company, UpsertOutcome]:
    """
    Find a company by name (ignoring case) or create it.

    An existing company keeps its stored spelling; its address is refreshed
    only when a non-empty address is supplied.

    Returns:
        (company, outcome)

    Raises:
        ValidationError: If name is blank or a field is not text
    """
    try:
        name = clean_text(name)
        address = clean_text(address)
    except ValueError:
        raise ValidationError('name and address must be text')
    if not name:
        raise ValidationError('name required', payload={'field': 'name'})

    try:
        company = find_company_by_name(session, name)
        if company:
            outcome = UpsertOutcome.UPDATED
        else:
            company = Company(name=name, address=address)
            session.add(company)
            session.flush()
            outcome = UpsertOutcome.CREATED

        if address is not None:
            company.address = address
        session.commit()

    except IntegrityError:
        # Race condition: another request created the same name simultaneously
        session.rollback()
        company = find_company_by_name(session, name)
        if company is None:
            raise
        outcome = UpsertOutcome.UPDATED
        if address is not None:
            company.address = address
            session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[COMPANIES] {outcome.value} '{company.name}' (id={company.id})")
    return company, outcome
