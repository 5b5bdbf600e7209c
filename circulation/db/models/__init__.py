from circulation.db.models.item import Item
from circulation.db.models.member import Member

__all__ = ["Item", "Member"]
