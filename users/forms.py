from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import UserCreationForm

User = get_user_model()  # Use consistently everywhere


# =======================
# Register Form
# =======================
class RegisterUserForm(UserCreationForm):
    full_name = forms.CharField(max_length=150, required=True)

    class Meta:
        model = User
        fields = ["username", "email", "full_name", "password1", "password2"]
        widgets = {
            "username": forms.TextInput(attrs={"autocomplete": "username"}),
            "email": forms.EmailInput(attrs={"autocomplete": "email"}),
        }

    def save(self, commit=True):
        # Self-service accounts are always vendors; admins are promoted by set_role
        user = super().save(commit=False)
        user.role = User.Role.VENDOR
        if commit:
            user.save()
        return user
