"""
Groups extracted fields by form part and by field type, and computes the
aggregate counts shown alongside the extraction results.
"""
import logging
import re
from typing import List, Dict, Any, Optional

from .field_records import FieldRecord, OFF_STATE

logger = logging.getLogger(__name__)

PART_PATTERN = re.compile(r'Pt(\d+)')
OTHER_PART = 'Other'

TYPE_BUCKETS = ['text', 'checkbox', 'button', 'choice', 'signature', 'other']


def part_of(field_name: str) -> str:
    """Form part a field belongs to, e.g. 'Part 1', or 'Other'."""
    match = PART_PATTERN.search(field_name)
    return f"Part {match.group(1)}" if match else OTHER_PART


def is_checkbox_name(field_name: str) -> bool:
    return 'checkbox' in field_name.lower() or 'CB' in field_name or '_YN' in field_name


def type_bucket(record: FieldRecord) -> str:
    """Map a record's raw field type to its display bucket."""
    if record.type == 'Text':
        return 'text'
    if record.type == 'Button':
        return 'checkbox' if is_checkbox_name(record.name) else 'button'
    if record.type == 'Choice':
        return 'choice'
    if record.type == 'Sig':
        return 'signature'
    return 'other'


def checkbox_values(record: FieldRecord) -> Optional[Dict[str, Any]]:
    """Values that check and uncheck a selectable field, or None."""
    if not record.is_selectable:
        return None
    return {
        'toCheck': [option for option in record.state_options if option != OFF_STATE],
        'toUncheck': OFF_STATE,
    }


def summarize_field(record: FieldRecord) -> Dict[str, Any]:
    return {
        'name': record.name,
        'type': record.type,
        'value': record.value or '',
        'maxLength': record.max_length,
        'options': record.options,
        'stateOptions': list(record.state_options),
        'checkboxValues': checkbox_values(record),
    }


def organize_fields(records: List[FieldRecord]) -> Dict[str, Any]:
    """
    Organize fields by part and by type.

    Args:
        records: Parsed field records

    Returns:
        Dictionary with 'byPart', 'byType' and 'all' listings
    """
    by_part: Dict[str, List[Dict[str, Any]]] = {}
    by_type: Dict[str, List[Dict[str, Any]]] = {bucket: [] for bucket in TYPE_BUCKETS}
    all_fields: List[Dict[str, Any]] = []

    for record in records:
        record_dict = record.to_dict()
        by_part.setdefault(part_of(record.name), []).append(record_dict)
        by_type[type_bucket(record)].append(record_dict)
        all_fields.append(summarize_field(record))

    return {
        'byPart': by_part,
        'byType': by_type,
        'all': all_fields,
    }


def get_statistics(records: List[FieldRecord]) -> Dict[str, Any]:
    """
    Aggregate counts for a document's fields.

    Useful for the summary shown next to the field listing.
    """
    type_counts: Dict[str, int] = {bucket: 0 for bucket in TYPE_BUCKETS}
    part_counts: Dict[str, int] = {}

    for record in records:
        type_counts[type_bucket(record)] += 1
        part = part_of(record.name)
        part_counts[part] = part_counts.get(part, 0) + 1

    return {
        'total_fields': len(records),
        'by_type': type_counts,
        'by_part': part_counts,
    }
