# apps/uploads/storage.py
import logging
import secrets
import time

import cloudinary.uploader

logger = logging.getLogger(__name__)


def make_public_id():
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def clean_folder(folder, default):
    folder = (folder or '').strip().strip('/')
    if not folder or '..' in folder:
        return default
    return folder


def upload_file(file, folder):
    """Upload a file-like object to Cloudinary, return its public https URL.

    Cloudinary errors propagate to the caller.
    """
    result = cloudinary.uploader.upload(
        file,
        folder=folder,
        public_id=make_public_id(),
        resource_type="auto",
        overwrite=False,
    )
    url = result["secure_url"]
    logger.info("Uploaded %s to %s", getattr(file, 'name', 'file'), url)
    return url
