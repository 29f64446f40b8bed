from django import forms
from django.core.exceptions import ValidationError

from rail_resource.forms import ResourceModelForm

from .models import Bar, Foo


class FooForm(ResourceModelForm):
    class Meta:
        model = Foo
        fields = ["name", "description", "detail"]

    def validate_update_group(self):
        if self.cleaned_data.get("name") == "locked":
            raise ValidationError("Locked objects cannot be renamed.", code="locked")


class PlainFooForm(forms.ModelForm):
    class Meta:
        model = Foo
        fields = ["name", "description"]


class BarForm(ResourceModelForm):
    class Meta:
        model = Bar
        fields = ["title", "reference", "tags"]
