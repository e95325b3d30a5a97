# showlog/models/__init__.py
from .venue import Venue
from .concert import Concert
