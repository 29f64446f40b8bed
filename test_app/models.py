from django.core.exceptions import ValidationError
from django.db import models

from rail_resource.models import SoftDeletableModel


class Foo(models.Model):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    detail = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        app_label = "test_app"
        ordering = ["id"]

    def __str__(self):
        return self.name


class Tag(models.Model):
    label = models.CharField(max_length=50, unique=True)

    class Meta:
        app_label = "test_app"


class Bar(SoftDeletableModel):
    title = models.CharField(max_length=100)
    reference = models.CharField(max_length=20, blank=True, default="")
    tags = models.ManyToManyField(Tag, blank=True, related_name="bars")
    owner = models.ForeignKey(
        Foo, null=True, blank=True, on_delete=models.SET_NULL, related_name="bars"
    )

    class Meta:
        app_label = "test_app"
        ordering = ["id"]

    def validate_create_group(self):
        if self.reference.startswith("legacy-"):
            raise ValidationError(
                {"reference": "Legacy references cannot be created."},
            )
