# users/constants.py
VENDOR = "vendor"
ADMIN = "admin"

ALL_ROLES = (VENDOR, ADMIN)
