"""Constants for Event model field names"""


class EventFields:
    """Field name constants for Event model"""
    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"
    LOCATION = "location"
    STARTS_AT = "starts_at"
    MAX_CAPACITY = "max_capacity"
    CURRENT_ATTENDEES = "current_attendees"
    IS_ACTIVE = "is_active"
    IS_FREE = "is_free"
    PRICE = "price"
    CREATED_AT = "created_at"
    IMAGE_URL = "image_url"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
