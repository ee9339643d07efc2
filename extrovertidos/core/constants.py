from enum import Enum


class RoleEnum(str, Enum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

MODERATION_ROLES = (RoleEnum.MODERATOR, RoleEnum.ADMIN)

class PublicationStatusEnum(str, Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"

class NotificationTypeEnum(str, Enum):
    PUBLICATION_APPROVED = "publication_approved"
    PUBLICATION_REJECTED = "publication_rejected"
    PUBLICATION_PENDING = "publication_pending"
    ACCOUNT_BANNED = "account_banned"
    ACCOUNT_UNBANNED = "account_unbanned"
    WELCOME = "welcome"
    INFO = "info"

class TableEnum(str, Enum):
    PROFILES = "profiles"
    EVENTS = "events"
    BUSINESSES = "businesses"
    CATEGORIES = "categories"
    NOTIFICATIONS = "notifications"
    USER_BANS = "user_bans"

MIN_BAN_REASON_LENGTH = 10

# Monday first, matches date.weekday()
DAY_LABELS = ("Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom")
