from fishfindr.models.base import Base
from fishfindr.models.location import Location

__all__ = ["Base", "Location"]
