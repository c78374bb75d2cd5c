"""twofactor._logging -- package logger"""

import logging

#: logger shared by all twofactor modules; the library never installs handlers.
logger = logging.getLogger("twofactor")
logger.addHandler(logging.NullHandler())
