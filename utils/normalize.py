# utils/normalize.py
"""
Field normalization for rows received over HTTP.

The API mixes snake_case and camelCase between resources; these helpers
give callers one predictable shape.
"""
import json


def first_present(row: dict, *keys, default=None):
     """Value of the first key that is present and not None."""
     for key in keys:
          value = row.get(key)
          if value is not None:
               return value
     return default


def normalize_property(prop: dict) -> dict:
     """
     Snake_case view of a property row.

     amenities is always a list, the boolean flags are real booleans, and
     rent_amount / security_deposit / property_type / square_feet are filled
     from whichever spelling the server used.
     """
     amenities = prop.get("amenities")
     if isinstance(amenities, str):
          amenities = json.loads(amenities) if amenities.strip() else []

     out = dict(prop)
     out.update(
          amenities=amenities,
          utilities_included=bool(prop.get("utilities_included")),
          pet_friendly=bool(prop.get("pet_friendly")),
          parking_available=bool(prop.get("parking_available")),
          rent_amount=first_present(prop, "rent_amount", "monthlyRent", "monthly_rent", default=0),
          security_deposit=first_present(prop, "security_deposit", "securityDeposit", default=0),
          property_type=first_present(prop, "property_type", "propertyType"),
          square_feet=first_present(prop, "square_feet", "squareFeet"),
     )
     return out


def normalize_notification(notification: dict) -> dict:
     out = dict(notification)
     is_read = first_present(notification, "is_read", "isRead", "read", default=False)
     out["is_read"] = bool(is_read)
     return out
