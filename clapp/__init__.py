__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'clapp'
__author__ = 'clapp developers'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .app import *
from .context import *
from .faults import *
from .flags import *
from .patterns import *
from .progress import *
from .router import *
from .spinners import *
from .terminal import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the application layer
__all__ += app.__all__  # type: ignore[attr-defined]
# Load the exposed API of the invocation context
__all__ += context.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the flag parser
__all__ += flags.__all__  # type: ignore[attr-defined]
# Load the exposed API of the pattern compiler
__all__ += patterns.__all__  # type: ignore[attr-defined]
# Load the exposed API of the progress bars
__all__ += progress.__all__  # type: ignore[attr-defined]
# Load the exposed API of the router
__all__ += router.__all__  # type: ignore[attr-defined]
# Load the exposed API of the spinners
__all__ += spinners.__all__  # type: ignore[attr-defined]
# Load the exposed API of the terminal primitives
__all__ += terminal.__all__  # type: ignore[attr-defined]
