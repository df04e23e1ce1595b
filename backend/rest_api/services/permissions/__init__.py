"""
Authorization helpers.

Usage:
    from rest_api.services.permissions import Principal, ensure_owner

    def update(self, restaurant_id: int, data: RestaurantUpdate, principal: Principal):
        restaurant = self.get_entity(restaurant_id)
        ensure_owner(principal, restaurant.owner.email, "update this restaurant")
"""

from .context import Principal, ensure_owner, ensure_role, ensure_self

__all__ = [
    "Principal",
    "ensure_owner",
    "ensure_role",
    "ensure_self",
]
