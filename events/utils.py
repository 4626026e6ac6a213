import logging
import os
import threading

import cloudinary.uploader
from cloudinary import CloudinaryResource
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.mail import send_mail

logger = logging.getLogger(__name__)

IMAGE_TYPES = ['image/jpeg', 'image/png', 'image/webp']
DOCUMENT_TYPES = ['image/jpeg', 'image/png', 'application/pdf']


def validate_upload(file, accepted_types, label):
    """Size / content-type checks shared by the banner, ID and video forms."""
    if file.size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("File size must be 5MB or less.")
    if accepted_types and file.content_type not in accepted_types:
        raise ValidationError(f"Only {label} files are accepted.")
    return file


def upload_file(file, folder, resource_type='image'):
    """
    Upload a file to the object store under `folder` and return a
    CloudinaryResource that can be assigned to a CloudinaryField.
    """
    public_id = os.path.splitext(os.path.basename(file.name))[0]
    result = cloudinary.uploader.upload(
        file,
        folder=folder,
        public_id=public_id,
        resource_type=resource_type,
        overwrite=True,
    )
    logger.info("Uploaded %s to %s", file.name, result.get('public_id'))
    return CloudinaryResource(
        result['public_id'],
        version=result.get('version'),
        format=result.get('format'),
        type=result.get('type', 'upload'),
        resource_type=result.get('resource_type', resource_type),
    )


def send_email_thread(subject, message, recipient_list):
    """Runs in its own thread so the request is not blocked by SMTP."""
    try:
        send_mail(
            subject,
            message,
            settings.DEFAULT_FROM_EMAIL,
            recipient_list,
            fail_silently=False,
        )
        logger.info("Email '%s' sent to %s recipient(s)", subject, len(recipient_list))
    except Exception:
        logger.exception("Failed to send email '%s'", subject)


def send_email_in_background(subject, message, recipient_list):
    thread = threading.Thread(target=send_email_thread, args=(subject, message, recipient_list))
    thread.start()
    return thread
