"""
Room Model
"""

from django.db import models


class RoomManager(models.Manager):

    def get_for_update(self, room_id):
        """
        Read a room holding an exclusive row lock until the surrounding
        transaction ends. Must be called inside ``transaction.atomic``.
        """
        return self.select_for_update().get(pk=room_id)


class Room(models.Model):
    """A bookable room."""

    name = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    floor = models.IntegerField()
    equipment = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered list of equipment tags"
    )
    image_url = models.URLField(max_length=500, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RoomManager()

    class Meta:
        db_table = 'rooms'
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0),
                name='room_capacity_positive'
            ),
        ]

    def __str__(self):
        return f"{self.name} (floor {self.floor})"
