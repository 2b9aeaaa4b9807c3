from .context import *  # NOQA
from .exceptions import *  # NOQA
from .pagination import *  # NOQA
from .params import *  # NOQA
from .provider import *  # NOQA
from .types import *  # NOQA
from .value_object import *  # NOQA
