# showlog/crud/__init__.py

from .crud_concert import concert
from .crud_venue import venue
