"""
Storage Utility
===============

Saves uploaded images for projects and clients: optional crop to a box
chosen in the admin UI, fit to the card size, re-encode as JPEG, and
write under UPLOAD_FOLDER/<subfolder>/. Files are served from /uploads.
"""

import io
import logging
import os
import uuid
from PIL import Image, ImageOps, UnidentifiedImageError
from .config import get_config_value
from .responses import APIError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

# Cards on the landing page are rendered at this size
IMAGE_SIZE = (450, 350)
JPEG_QUALITY = 85

URL_PREFIX = '/uploads/'


def get_upload_folder():
    return get_config_value('UPLOAD_FOLDER', 'uploads')


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def parse_crop_box(form):
    """
    Read cropX/cropY/cropWidth/cropHeight from a form.
    Returns a (left, upper, right, lower) box, or None when no crop was sent.
    """
    keys = ('cropX', 'cropY', 'cropWidth', 'cropHeight')
    if not any(form.get(key) for key in keys):
        return None

    try:
        x, y, w, h = (int(round(float(form.get(key, 0)))) for key in keys)
    except (TypeError, ValueError):
        raise APIError('Invalid crop parameters', 400)

    if w <= 0 or h <= 0 or x < 0 or y < 0:
        raise APIError('Invalid crop parameters', 400)
    return (x, y, x + w, y + h)


def process_image(image_bytes, crop_box=None, size=IMAGE_SIZE):
    """Crop (optionally) and fit an image, returning JPEG bytes"""
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError):
        raise APIError('Only image files are allowed', 400)

    if crop_box:
        right = min(crop_box[2], img.width)
        lower = min(crop_box[3], img.height)
        if crop_box[0] >= right or crop_box[1] >= lower:
            raise APIError('Invalid crop parameters', 400)
        img = img.crop((crop_box[0], crop_box[1], right, lower))

    img = ImageOps.fit(img, size)

    # Convert to RGB if needed (for JPEG output)
    if img.mode in ('RGBA', 'P', 'LA'):
        img = img.convert('RGB')

    buf = io.BytesIO()
    img.save(buf, format='JPEG', quality=JPEG_QUALITY)
    return buf.getvalue()


def save_image(file, subfolder, crop_box=None):
    """
    Validate, process and store an uploaded image.

    Args:
        file: werkzeug FileStorage from request.files
        subfolder: "projects" or "clients"
        crop_box: optional (left, upper, right, lower)

    Returns:
        URL path such as "/uploads/projects/<uuid>.jpg"
    """
    if not file or not file.filename:
        raise APIError('No file selected', 400)
    if not allowed_file(file.filename):
        raise APIError('Only image files are allowed', 400)
    if file.mimetype and not file.mimetype.startswith('image/') \
            and file.mimetype != 'application/octet-stream':
        raise APIError('Only image files are allowed', 400)

    processed = process_image(file.read(), crop_box)

    upload_dir = os.path.join(get_upload_folder(), subfolder)
    os.makedirs(upload_dir, exist_ok=True)

    filename = f"{uuid.uuid4().hex}.jpg"
    with open(os.path.join(upload_dir, filename), 'wb') as f:
        f.write(processed)

    logger.info("Saved image %s/%s (%d bytes)", subfolder, filename, len(processed))
    return f"{URL_PREFIX}{subfolder}/{filename}"


def delete_image(image_url):
    """Delete a stored image by its URL path. Returns True if a file was removed."""
    if not image_url or not image_url.startswith(URL_PREFIX):
        return False

    upload_root = os.path.abspath(get_upload_folder())
    full_path = os.path.abspath(os.path.join(upload_root, image_url[len(URL_PREFIX):]))
    if not full_path.startswith(upload_root + os.sep):
        return False

    if os.path.isfile(full_path):
        os.unlink(full_path)
        logger.info("Deleted image %s", image_url)
        return True
    return False
