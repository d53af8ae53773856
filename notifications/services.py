# notifications/services.py
from __future__ import annotations

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)


def notify(user, title: str, message: str, *, event: str = "", level: str = "info", url: str = "") -> Notification:
    """Store an in-app notification and e-mail it (best-effort) to the user."""
    note = Notification.objects.create(
        user=user, event=event, title=title, message=message, level=level, url=url
    )

    if getattr(user, "email", None):
        try:
            sent = send_mail(
                subject=f"{getattr(settings, 'EMAIL_SUBJECT_PREFIX', '')}{title}",
                message=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
            )
        except (SMTPException, OSError):
            # Delivery problems never fail the caller; the in-app row is the record
            logger.warning("notification email failed user=%s event=%s", user.pk, event, exc_info=True)
        else:
            if sent:
                note.emailed = True
                note.save(update_fields=["emailed"])

    return note


def unread_for(user, limit: int = 10):
    return Notification.objects.filter(user=user, read_at__isnull=True)[:limit]


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, read_at__isnull=True).update(read_at=timezone.now())
