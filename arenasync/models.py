from enum import StrEnum

from tortoise import fields
from tortoise.models import Model


class Platform(StrEnum):
    PLAYO = "PlayO"
    HUDDLE = "Huddle"
    KHELOMORE = "KheloMore"
    OFFLINE = "Offline"  # walk-in at the desk


class InventoryItem(Model):
    id = fields.UUIDField(primary_key=True)
    name = fields.CharField(max_length=255)
    price = fields.DecimalField(max_digits=10, decimal_places=2)

    class Meta:  # type: ignore
        table = "inventory"
        ordering = ["name"]


class Booking(Model):
    id = fields.UUIDField(primary_key=True)

    customer_name = fields.CharField(max_length=255)
    phone_number = fields.CharField(max_length=32)
    platform = fields.CharEnumField(Platform, default=Platform.PLAYO)

    booking_amount = fields.DecimalField(max_digits=10, decimal_places=2)

    extra_hours_enabled = fields.BooleanField(default=False)
    extra_hours_duration = fields.DecimalField(
        max_digits=5, decimal_places=2, default=0
    )  # informational only
    extra_hours_amount = fields.DecimalField(max_digits=10, decimal_places=2, default=0)

    total_amount = fields.DecimalField(max_digits=10, decimal_places=2)  # computed
    created_at = fields.DatetimeField(auto_now_add=True)

    drinks: fields.ReverseRelation["BookingDrink"]

    class Meta:  # type: ignore
        table = "bookings"
        ordering = ["-created_at"]


class BookingDrink(Model):
    id = fields.IntField(primary_key=True)  # insertion order of the drink lines

    booking: fields.ForeignKeyRelation[Booking] = fields.ForeignKeyField(
        "models.Booking", related_name="drinks", on_delete=fields.CASCADE
    )
    drink_id = fields.UUIDField()  # not a FK: inventory rows may be deleted later
    quantity = fields.IntField()
    price_at_time = fields.DecimalField(
        max_digits=10, decimal_places=2
    )  # snapshot at booking time

    class Meta:  # type: ignore
        table = "booking_drinks"
