# users/context_processors.py
from .constants import ADMIN, VENDOR


def role(request):
    u = request.user
    if not u.is_authenticated:
        current = "guest"
    else:
        current = u.effective_role

    return {
        "current_role": current,
        "user_is_vendor": current == VENDOR,
        "user_is_admin": current == ADMIN,
    }
