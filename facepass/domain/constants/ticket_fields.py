"""Constants for Ticket model field names"""


class TicketFields:
    """Field name constants for Ticket model"""
    ID = "id"
    EVENT_ID = "event_id"
    HOLDER_NAME = "holder_name"
    HOLDER_EMAIL = "holder_email"
    HOLDER_NATIONAL_ID = "holder_national_id"
    TICKET_CLASS = "ticket_class"
    PRICE = "price"
    STATUS = "status"
    PURCHASED_AT = "purchased_at"
    FACE_DESCRIPTOR = "face_descriptor"
    FACE_DESCRIPTOR_METHOD = "face_descriptor_method"
    FACE_IMAGE = "face_image"
    ENROLLED_AT = "enrolled_at"
    USED_AT = "used_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
