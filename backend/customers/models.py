"""
Customer models.

A customer is an optional party on an order. The only state the order engine
touches is the rewards points balance, which is mutated exclusively through
``customers.services.RewardsService``.
"""
import uuid

from django.db import models


class CustomerManager(models.Manager):
    """Custom manager for Customer model"""

    def normalize_email(self, email):
        """Normalize email address"""
        if email:
            email = email.strip().lower()
        return email or None

    def create_customer(self, email=None, phone_number=None, **extra_fields):
        """Create a customer identified by email and/or phone number"""
        if not email and not phone_number:
            raise ValueError('Either email or phone number is required')

        customer = self.model(
            email=self.normalize_email(email),
            phone_number=phone_number or None,
            **extra_fields,
        )
        customer.save(using=self._db)
        return customer


class Customer(models.Model):
    """Rewards-program customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(
        unique=True,
        null=True,
        blank=True,
        help_text="Customer's primary email address"
    )
    phone_number = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text="Customer's phone number"
    )

    # Never negative; only RewardsService writes it.
    rewards_points = models.PositiveIntegerField(
        default=0,
        help_text="Current redeemable rewards points balance"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerManager()

    class Meta:
        db_table = 'customer'
        ordering = ['-created_at']
        verbose_name = 'Customer'
        verbose_name_plural = 'Customers'

    def __str__(self):
        return self.name or self.email or self.phone_number or str(self.id)
