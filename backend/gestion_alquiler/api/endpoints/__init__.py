"""
API endpoints package
"""

from . import apartments
from . import auth
from . import dashboard
from . import expenses
from . import health
from . import incomes
from . import intermediaries
from . import rates
from . import users
