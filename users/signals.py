import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_login(sender, user, request, **kwargs):
    backend = request.session.get("_auth_user_backend") if request is not None else None
    ip = request.META.get("REMOTE_ADDR", "") if request is not None else ""
    logger.info("login user=%s role=%s backend=%s ip=%s", user.pk, user.effective_role, backend, ip)
