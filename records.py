import logging
from typing import Any, Dict, Iterable, List, Tuple
from pydantic import ValidationError

from schemas import Record, RecordSet, RecordType
from sanitizer import TXTSanitizer
from error_handlers import RecordValidationException

logger = logging.getLogger(__name__)


def ensure_trailing_dot(name: str) -> str:
    """Ensure that a name ends with a dot"""
    if not name.endswith('.'):
        return name + '.'

    return name


def qualify_name(name: str, zone: str) -> str:
    """
    Turns a zone relative name into a fully qualified one.
    '@' and the empty string refer to the zone apex.
    """
    zone = ensure_trailing_dot(zone)
    if name in ("", "@"):
        return zone

    fqdn = ensure_trailing_dot(name)
    # DNS names compare case-insensitively
    lowered, zone_lowered = fqdn.lower(), zone.lower()
    if lowered == zone_lowered or lowered.endswith("." + zone_lowered):
        return fqdn
    return f"{name.rstrip('.')}.{zone}"


def record_content(record: Record) -> str:
    """Presentation format content for a single record."""
    if record.type == RecordType.TXT:
        return TXTSanitizer.sanitize_text(record.value)
    return record.value


def parse_record(payload: Dict[str, Any]) -> Record:
    """Validates a raw record payload into a Record."""
    try:
        return Record.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Invalid record payload: {payload}")
        raise RecordValidationException(f"Invalid record: {e}")


def build_record_sets(zone: str, records: Iterable[Record]) -> List[RecordSet]:
    """
    Groups records into one set per name and type, in the order they first
    appear. Contents already present in a set are skipped, which makes it safe
    to re-submit values read back from the API.
    """
    sets: Dict[Tuple[str, RecordType], RecordSet] = {}

    for record in records:
        fqdn = qualify_name(record.name, zone)
        key = (fqdn, record.type)
        rrset = sets.get(key)
        if rrset is None:
            rrset = RecordSet(name=fqdn, type=record.type, ttl=record.ttl)
            sets[key] = rrset
        elif record.ttl != rrset.ttl:
            logger.warning(
                f"TTL {record.ttl} for {fqdn} {record.type.value} differs from set TTL {rrset.ttl}, keeping {rrset.ttl}"
            )

        content = record_content(record)
        if content not in rrset.records:
            rrset.records.append(content)

    return list(sets.values())
