"""Standard role names for routeauth.

The application ships three roles:
1. Admin - Full access, lands on /home
2. User - File storage user, lands on /home
3. Sale - Sales staff, lands on /plans

Role names are opaque strings; actors may also hold roles that are not
listed here, which simply match no route requirement.
"""

from typing import List

ADMIN = "Admin"
USER = "User"
SALE = "Sale"

STANDARD_ROLES: List[str] = [ADMIN, USER, SALE]

# Common role groupings used by the built-in route table
ALL_ROLES = (ADMIN, USER, SALE)
ADMIN_ONLY = (ADMIN,)
STORAGE_ROLES = (ADMIN, USER)
