from __future__ import annotations

import logging

from django.db import transaction
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from notifications.services import notify

from .models import ApplicationStatus, VendorApplication

logger = logging.getLogger(__name__)

STATUS_URL = "/vendor/status/"


@receiver(pre_save, sender=VendorApplication)
def stash_old_status(sender, instance, **kwargs):
    if instance.pk:
        instance._old_status = (
            VendorApplication.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )
    else:
        instance._old_status = None


@receiver(post_save, sender=VendorApplication)
def notify_status(sender, instance, created, **kwargs):
    user = instance.user

    if created:
        transaction.on_commit(lambda: notify(
            user,
            "Vendor application received",
            f"Thanks! Your application for {instance.business_name} was submitted and is pending review.",
            event="kyc.application.received",
            level="info",
            url=STATUS_URL,
        ))
        return

    old = getattr(instance, "_old_status", None)
    if not old or old == instance.status:
        return

    if instance.status == ApplicationStatus.APPROVED:
        transaction.on_commit(lambda: notify(
            user,
            "Vendor application approved",
            f"Congratulations! {instance.business_name} has been approved as a vendor.",
            event="kyc.application.approved",
            level="success",
            url=STATUS_URL,
        ))
    elif instance.status == ApplicationStatus.REJECTED:
        reason = instance.rejection_reason or "Your application did not meet the requirements."
        transaction.on_commit(lambda: notify(
            user,
            "Vendor application rejected",
            reason,
            event="kyc.application.rejected",
            level="warning",
            url=STATUS_URL,
        ))
    else:
        logger.warning("unexpected status change app=%s %s -> %s", instance.pk, old, instance.status)
