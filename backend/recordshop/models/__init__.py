# Importing the models registers every table on Base.metadata
from recordshop.models.record import Detail, Record, Track
from recordshop.models.user import User

__all__ = ["Detail", "Record", "Track", "User"]
