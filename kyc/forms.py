from django import forms

from .attachments import validate_attachment
from .exceptions import AttachmentRejected
from .models import DocumentType, VendorApplication

ACCEPT = ".pdf,.jpg,.jpeg,.png"


class VendorApplicationForm(forms.ModelForm):
    """Business details plus one optional file input per document type."""

    gst = forms.FileField(required=False, label=DocumentType.GST.label)
    pan = forms.FileField(required=False, label=DocumentType.PAN.label)
    registration = forms.FileField(required=False, label=DocumentType.REGISTRATION.label)
    other = forms.FileField(required=False, label=DocumentType.OTHER.label)

    class Meta:
        model = VendorApplication
        fields = [
            "business_name",
            "business_type",
            "contact_number",
            "email",
            "address",
            "city",
            "state",
            "pincode",
            "gst_number",
            "pan_number",
        ]
        widgets = {
            "address": forms.Textarea(attrs={"rows": 3}),
            "contact_number": forms.TextInput(attrs={"autocomplete": "tel"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in DocumentType.values:
            self.fields[name].widget.attrs["accept"] = ACCEPT

    def _clean_document(self, name):
        upload = self.cleaned_data.get(name)
        if not upload:
            return None
        try:
            return validate_attachment(upload)
        except AttachmentRejected as e:
            raise forms.ValidationError([str(m) for m in e.detail])

    def clean_gst(self):
        return self._clean_document("gst")

    def clean_pan(self):
        return self._clean_document("pan")

    def clean_registration(self):
        return self._clean_document("registration")

    def clean_other(self):
        return self._clean_document("other")

    def application_data(self) -> dict:
        return {f: self.cleaned_data.get(f, "") for f in self.Meta.fields}

    def document_files(self) -> dict:
        return {t: self.cleaned_data[t] for t in DocumentType.values if self.cleaned_data.get(t)}


class ApproveForm(forms.Form):
    comments = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}))


class RejectForm(forms.Form):
    reason = forms.CharField(
        required=True,
        strip=True,
        widget=forms.Textarea(attrs={"rows": 3}),
        error_messages={"required": "A rejection reason is required."},
    )
