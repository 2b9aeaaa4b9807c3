from .api_provider import *  # NOQA
from .exceptions import *  # NOQA
from .pager import *  # NOQA
from .path_builder import *  # NOQA
from .response import *  # NOQA
from .sync_api_provider import *  # NOQA
