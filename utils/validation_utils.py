"""
utils/validation_utils.py

Purpose: Input validation

- Indian mobile number validation and +91 formatting
- OTP format checks
- Pincode validation
- Area slugs for the aggregate collection
- Input sanitization
"""

import re
from typing import Optional

MOBILE_PATTERN = re.compile(r"^[6-9]\d{9}$")
OTP_PATTERN = re.compile(r"^\d{6}$")
PINCODE_PATTERN = re.compile(r"^\d{6}$")


def validate_indian_mobile(mobile: str) -> bool:
    """
    Validates a 10-digit Indian mobile number.

    Only the bare national number is accepted: 10 digits, first digit 6-9.

    Args:
        mobile: Mobile number string

    Returns:
        True if valid
    """
    if not mobile:
        return False
    return bool(MOBILE_PATTERN.match(mobile.strip()))


def format_phone_number(mobile: str, country_code: str = "+91") -> str:
    """
    Formats a validated 10-digit mobile into the canonical phone identifier.

    Example: "9876543210" -> "+919876543210"

    Raises:
        ValueError: If the mobile is not a valid Indian number
    """
    mobile = (mobile or "").strip()
    if not validate_indian_mobile(mobile):
        raise ValueError("Please enter a valid 10-digit Indian mobile number")
    return f"{country_code}{mobile}"


def strip_country_code(phone: str, country_code: str = "+91") -> str:
    """
    Reverses format_phone_number: "+919876543210" -> "9876543210".
    Numbers without the prefix are returned unchanged.
    """
    phone = (phone or "").strip()
    if phone.startswith(country_code):
        return phone[len(country_code):]
    return phone


def validate_otp_format(otp: str) -> bool:
    """
    Validates OTP format (must be 6 digits).
    """
    if not otp:
        return False
    return bool(OTP_PATTERN.match(otp.strip()))


def validate_pincode(pincode: Optional[str]) -> bool:
    """
    Validates a 6-digit Indian postal code. Empty is allowed.
    """
    if not pincode:
        return True
    return bool(PINCODE_PATTERN.match(pincode.strip()))


def slugify_area(name: str) -> str:
    """
    Builds the aggregate key for an area name.

    Lower-cases the name and replaces each run of characters outside
    [a-z0-9] with a single hyphen: "Andheri East" -> "andheri-east".
    """
    return re.sub(r"[^a-z0-9]+", "-", (name or "").lower())


def sanitize_input(text: Optional[str], max_length: int = 1000) -> str:
    """
    Sanitizes free-text user input.

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Trimmed text with markup characters removed and whitespace normalized
    """
    if not text:
        return ""

    text = text[:max_length]
    text = re.sub(r"[<>{}\[\]]", "", text)
    text = " ".join(text.split())

    return text.strip()
