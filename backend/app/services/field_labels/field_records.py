"""
Field Dump Parser
=================

Turns the line-oriented output of ``pdftk <file> dump_data_fields`` into
structured field records.

Input format (one directive per line, records separated by ``---``):

    ---
    FieldType: Button
    FieldName: form1[0].#subform[0].CB_AppType[0]
    FieldFlags: 0
    FieldValue: Off
    FieldJustification: Left
    FieldStateOption: A
    FieldStateOption: Off

The parser never raises. Unknown lines are ignored, a record without a
``FieldName`` is dropped silently, and a non-numeric ``FieldMaxLength`` is
treated as absent.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = '---'
OFF_STATE = 'Off'
_LEADING_DIGITS = re.compile(r'\d+')

# Directive prefix -> FieldRecord attribute
DIRECTIVES: Dict[str, str] = {
    'FieldName:': 'name',
    'FieldType:': 'type',
    'FieldFlags:': 'flags',
    'FieldValue:': 'value',
    'FieldJustification:': 'justification',
    'FieldMaxLength:': 'max_length',
    'FieldStateOption:': 'state_options',
}


@dataclass
class FieldRecord:
    """
    One form field as described by the field dump.

    ``type`` is passed through verbatim (Text, Button, Choice, Sig or
    whatever the tool reports).
    """
    name: str
    type: Optional[str] = None
    flags: Optional[str] = None
    value: Optional[str] = None
    justification: Optional[str] = None
    max_length: Optional[int] = None
    state_options: List[str] = field(default_factory=list)

    @property
    def options(self) -> List[str]:
        """Selectable states without the 'Off' sentinel or empty entries."""
        return [option for option in self.state_options if option and option != OFF_STATE]

    @property
    def is_selectable(self) -> bool:
        return len(self.state_options) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (camelCase keys)."""
        return {
            'name': self.name,
            'type': self.type,
            'flags': self.flags,
            'value': self.value,
            'justification': self.justification,
            'maxLength': self.max_length,
            'stateOptions': list(self.state_options),
            'options': self.options,
        }


def _parse_max_length(raw: str) -> Optional[int]:
    """Parse a FieldMaxLength value; anything non-numeric means unbounded."""
    match = _LEADING_DIGITS.match(raw)
    if not match:
        return None
    max_length = int(match.group(0))
    return max_length if max_length > 0 else None


def parse_field_dump(output: str) -> List[FieldRecord]:
    """
    Parse pdftk dump_data_fields output into field records.

    Args:
        output: Raw text printed by pdftk

    Returns:
        Field records in the order they were encountered
    """
    records: List[FieldRecord] = []
    current: Dict[str, Any] = {}

    def flush():
        if current.get('name'):
            records.append(FieldRecord(**current))
        elif current:
            logger.debug(f"Dropping unnamed field block: {sorted(current)}")
        current.clear()

    for line in (output or '').splitlines():
        trimmed = line.strip()

        if trimmed == FIELD_SEPARATOR:
            flush()
            continue

        for prefix, attribute in DIRECTIVES.items():
            if not trimmed.startswith(prefix):
                continue
            remainder = trimmed[len(prefix):].strip()

            if attribute == 'state_options':
                # Keep every state, including 'Off', in encounter order
                current.setdefault('state_options', []).append(remainder)
            elif attribute == 'max_length':
                current['max_length'] = _parse_max_length(remainder)
            else:
                current[attribute] = remainder
            break

    # Stream may end without a trailing separator
    flush()

    logger.debug(f"Parsed {len(records)} field records from dump")
    return records
