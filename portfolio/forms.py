from django import forms

from .models import ContactMessage, Project


class ContactMessageForm(forms.ModelForm):
    class Meta:
        model = ContactMessage
        fields = [
            "name",
            "email",
            "subject",
            "message",
        ]

    def clean_message(self):
        message = self.cleaned_data["message"].strip()
        if not message:
            raise forms.ValidationError("Message cannot be empty.")
        return message


class ProjectForm(forms.ModelForm):
    # Comma-separated in the form, a list on the model.
    topics = forms.CharField(required=False)

    class Meta:
        model = Project
        fields = [
            "repo_name",
            "title",
            "description",
            "github_url",
            "live_url",
            "language",
            "topics",
            "featured",
            "visible",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and not self.is_bound:
            self.initial["topics"] = ", ".join(self.instance.topics or [])

    def clean_topics(self):
        raw = self.cleaned_data.get("topics") or ""
        return [t.strip() for t in raw.split(",") if t.strip()]

    def clean(self):
        cleaned = super().clean()
        # Blank overrides are stored as NULL so sync can fill them in.
        for name in ("title", "description", "live_url", "language"):
            if not cleaned.get(name):
                cleaned[name] = None
        return cleaned
