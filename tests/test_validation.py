"""
Validation and image-processing helpers.
"""

import io

import pytest
from PIL import Image
from werkzeug.datastructures import MultiDict

from showcase.core import APIError
from showcase.core.storage import parse_crop_box, process_image, allowed_file
from showcase.core.validation import (
    validate_email,
    validate_required,
    validate_mobile_number,
    validate_max_length,
    get_validation_errors,
    CONTACT_RULES,
    CLIENT_RULES,
)


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("email,valid", [
    ("a@b.co", True),
    ("first.last+tag@sub.example.org", True),
    ("a@b", False),
    ("a b@c.com", False),
    ("@b.com", False),
    ("", False),
    (None, False),
])
def test_validate_email(email, valid):
    assert validate_email(email) is valid


@pytest.mark.parametrize("mobile,valid", [
    ("1234567890", True),
    ("123-456-7890", True),
    ("123 456 7890 12", True),
    ("123456789012345", True),
    ("123456789", False),
    ("1234567890123456", False),
    ("+11234567890", False),
    ("12345abcde", False),
    ("", False),
])
def test_validate_mobile_number(mobile, valid):
    assert validate_mobile_number(mobile) is valid


def test_validate_required():
    assert validate_required("x") is True
    assert validate_required("   ") is False
    assert validate_required("") is False
    assert validate_required(None) is False


def test_validate_max_length():
    assert validate_max_length("abc", 3) is True
    assert validate_max_length("abcd", 3) is False
    assert validate_max_length(None, 0) is True


# ---------------------------------------------------------------------------
# Rule sets -- first failing rule per field, fields in declared order
# ---------------------------------------------------------------------------

def test_contact_rules_report_first_failure_per_field():
    errors = get_validation_errors(
        {"fullName": "", "email": "", "mobileNumber": "12", "city": "Austin"},
        CONTACT_RULES,
    )
    assert errors == [
        {"field": "fullName", "message": "Full name is required"},
        {"field": "email", "message": "Email is required"},
        {"field": "mobileNumber", "message": "Please enter a valid mobile number"},
    ]


def test_valid_contact_has_no_errors():
    data = {"fullName": "Sam", "email": "sam@example.com", "mobileNumber": "5551234567", "city": "Austin"}
    assert get_validation_errors(data, CONTACT_RULES) == []


def test_missing_keys_are_treated_as_empty():
    fields = [e["field"] for e in get_validation_errors({}, CLIENT_RULES)]
    assert fields == ["name", "description", "designation"]


# ---------------------------------------------------------------------------
# Crop box parsing and image processing
# ---------------------------------------------------------------------------

def _png(size=(600, 400)):
    buf = io.BytesIO()
    Image.new("RGBA", size, (10, 20, 30, 255)).save(buf, format="PNG")
    return buf.getvalue()


def test_parse_crop_box():
    assert parse_crop_box(MultiDict()) is None
    assert parse_crop_box(MultiDict({"cropX": "10", "cropY": "20", "cropWidth": "100.4", "cropHeight": "50"})) == (10, 20, 110, 70)


@pytest.mark.parametrize("form", [
    {"cropX": "a", "cropY": "0", "cropWidth": "10", "cropHeight": "10"},
    {"cropX": "0", "cropY": "0", "cropWidth": "0", "cropHeight": "10"},
    {"cropX": "-1", "cropY": "0", "cropWidth": "10", "cropHeight": "10"},
])
def test_parse_crop_box_invalid(form):
    with pytest.raises(APIError) as exc:
        parse_crop_box(MultiDict(form))
    assert exc.value.status == 400
    assert exc.value.message == "Invalid crop parameters"


def test_process_image_fits_card_size():
    out = Image.open(io.BytesIO(process_image(_png())))
    assert out.format == "JPEG"
    assert out.size == (450, 350)
    assert out.mode == "RGB"


def test_process_image_crops_first():
    # Crop box runs past the right edge and is clamped to the image
    out = Image.open(io.BytesIO(process_image(_png(), crop_box=(500, 0, 900, 400))))
    assert out.size == (450, 350)


def test_process_image_rejects_garbage():
    with pytest.raises(APIError) as exc:
        process_image(b"definitely not an image")
    assert exc.value.message == "Only image files are allowed"


@pytest.mark.parametrize("name,allowed", [
    ("photo.JPG", True),
    ("photo.webp", True),
    ("archive.tar.gz", False),
    ("noextension", False),
])
def test_allowed_file(name, allowed):
    assert allowed_file(name) is allowed
