"""
Domain Enums - Business domain enumerations
"""

from enum import Enum


class AccountRole(str, Enum):
    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class OrderAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    COMPLETE = "complete"


class WithdrawalStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    REJECTED = "rejected"


class WithdrawalAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class SettingType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"


class UploadPurpose(str, Enum):
    AVATAR = "avatar"
    DELIVERY = "delivery"


class CreatorSort(str, Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DELIVERY_TIME = "delivery_time"
    NEWEST = "newest"
    RATING = "rating"
