# apps/clients/models.py
from django.db import models


class Address(models.Model):
    """
    Mailing address. Belongs to at most one client and is removed
    together with it.
    """
    street_address = models.CharField(max_length=255)
    city = models.CharField(max_length=120)
    state = models.CharField(max_length=120)
    zip = models.CharField(max_length=6)

    class Meta:
        verbose_name_plural = 'addresses'

    def __str__(self):
        return f"{self.street_address}, {self.city}, {self.state} {self.zip}"


class Client(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.CharField(max_length=254)
    phone = models.CharField(max_length=40)
    description = models.TextField(blank=True, null=True)
    # FK lives on the client row; the address has no lifecycle of its own
    address = models.OneToOneField(
        Address,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='client',
    )

    def __str__(self):
        return f"{self.first_name} {self.last_name}"
