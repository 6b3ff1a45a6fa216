"""Driver service: lookup and upsert of drivers met at the gate."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from weighbridge.exceptions import ValidationError
from weighbridge.models import Driver
from weighbridge.services.outcome import UpsertOutcome
from weighbridge.utils.text import clean_text

logger = logging.getLogger(__name__)


def list_drivers(session) -> List[Driver]:
    return session.query(Driver).order_by(Driver.name).all()


def search_drivers(session, query: str, limit: int = 10) -> List[Driver]:
    query = (query or '').strip()
    if not query:
        return []
    return session.query(Driver).filter(
        func.lower(Driver.name).contains(query.lower(), autoescape=True)
    ).order_by(Driver.name).limit(limit).all()


def find_driver_by_name(session, name: str) -> Optional[Driver]:
    name = clean_text(name)
    if not name:
        return None
    return session.query(Driver).filter(func.lower(Driver.name) == name.lower()).first()


def _refresh(driver: Driver, phone: Optional[str], last_plate: Optional[str]) -> None:
    if phone is not None:
        driver.phone = phone
    if last_plate is not None:
        driver.last_plate = last_plate


def upsert_driver(
    session,
    name: str,
    phone: Optional[str] = None,
    last_plate: Optional[str] = None,
) -> Tuple[Driver, UpsertOutcome]:
    """
    Find a driver by name (ignoring case) and refresh phone / plate, or create one.

    Blank phone or plate values leave the stored ones untouched.
    """
    try:
        name = clean_text(name)
        phone = clean_text(phone)
        last_plate = clean_text(last_plate)
    except ValueError:
        raise ValidationError('name, phone and last_plate must be text')
    if not name:
        raise ValidationError('name required', payload={'field': 'name'})

    try:
        driver = find_driver_by_name(session, name)
        if driver:
            outcome = UpsertOutcome.UPDATED
        else:
            driver = Driver(name=name)
            session.add(driver)
            outcome = UpsertOutcome.CREATED

        _refresh(driver, phone, last_plate)
        session.flush()
        session.commit()

    except IntegrityError:
        session.rollback()
        driver = find_driver_by_name(session, name)
        if driver is None:
            raise
        outcome = UpsertOutcome.UPDATED
        _refresh(driver, phone, last_plate)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[DRIVERS] {outcome.value} '{driver.name}' (id={driver.id})")
    return driver, outcome
