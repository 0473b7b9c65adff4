# This file tells Python that the 'routes' directory is a package.
# It also gathers all routers for easier import in main.py.

from . import health
from . import panel
