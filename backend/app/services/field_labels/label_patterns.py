"""
Field Name Label Patterns
=========================

Ordered mapping from field-name substrings to canonical captions, used when
no page text matches a field well enough.

Order matters: the first pattern found (case-insensitively) anywhere in the
raw field name wins, so more specific keys sit ahead of the generic ones
they contain (``DateOfBirth`` before ``Date``). Keep this a list of pairs,
not a dict, so precedence stays explicit.
"""

from typing import List, Optional, Tuple

LabelPattern = Tuple[str, str]

PERSONAL_PATTERNS: List[LabelPattern] = [
    ('FirstName', 'First Name'),
    ('LastName', 'Last Name'),
    ('MiddleName', 'Middle Name'),
    ('FullName', 'Full Name'),
    ('DOB', 'Date of Birth'),
    ('DateOfBirth', 'Date of Birth'),
    ('SSN', 'Social Security Number'),
    ('TaxID', 'Tax ID Number'),
    ('EmployerID', 'Employer ID Number'),
]

CONTACT_PATTERNS: List[LabelPattern] = [
    ('Email', 'Email Address'),
    ('Phone', 'Phone Number'),
    ('Mobile', 'Mobile Number'),
    ('Fax', 'Fax Number'),
    ('Address', 'Address'),
    ('Street', 'Street Address'),
    ('City', 'City'),
    ('State', 'State'),
    ('Province', 'Province'),
    ('PostalCode', 'Postal Code'),
    ('ZipCode', 'ZIP Code'),
    ('Country', 'Country'),
]

FORM_PATTERNS: List[LabelPattern] = [
    ('Signature', 'Signature'),
    ('Date', 'Date'),
    ('Checkbox', 'Checkbox Selection'),
    ('YesNo', 'Yes/No Selection'),
]

APPLICATION_PATTERNS: List[LabelPattern] = [
    ('ApplicantName', 'Name of Primary Applicant'),
    ('BeneficiaryName', 'Beneficiary Name'),
    ('PetitionerName', 'Petitioner Name'),
    ('EmployerName', 'Employer Name'),
    ('JobTitle', 'Job Title'),
    ('Occupation', 'Occupation'),
    ('Department', 'Department'),
]

DOCUMENT_PATTERNS: List[LabelPattern] = [
    ('CaseNumber', 'Case Number'),
    ('ReceiptNumber', 'Receipt Number'),
    ('FileNumber', 'File Number'),
    ('AlienNumber', 'Alien Registration Number'),
    ('PassportNumber', 'Passport Number'),
    ('VisaNumber', 'Visa Number'),
]

LABEL_PATTERNS: List[LabelPattern] = (
    PERSONAL_PATTERNS
    + CONTACT_PATTERNS
    + FORM_PATTERNS
    + APPLICATION_PATTERNS
    + DOCUMENT_PATTERNS
)


def lookup_label(field_name: str, patterns: List[LabelPattern] = LABEL_PATTERNS) -> Optional[str]:
    """Return the caption of the first pattern contained in the field name."""
    name_lower = (field_name or '').lower()
    for key, label in patterns:
        if key.lower() in name_lower:
            return label
    return None
