# users/views.py
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import login
from django.shortcuts import redirect, render

from .forms import RegisterUserForm

logger = logging.getLogger(__name__)


def register(request):
    if request.user.is_authenticated:
        return redirect("dashboard")

    if request.method == "POST":
        form = RegisterUserForm(request.POST)
        if form.is_valid():
            user = form.save()
            login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            logger.info("vendor account created user=%s", user.pk)
            messages.success(request, "Account created. You can now submit your KYC application.")
            return redirect("dashboard")
        messages.error(request, "Please correct the errors below.")
    else:
        form = RegisterUserForm()

    return render(request, "users/register.html", {"form": form})
