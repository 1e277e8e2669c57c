__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'sweetcli'
__author__ = 'bluefirex'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .aliases import *
from .application import *
from .commands import *
from .config import *
from .console import *
from .context import *
from .faults import *
from .parser import *
from .printer import *
from .registry import *
from .schema import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the schema layer
__all__ += schema.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the subcommands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the application
__all__ += application.__all__  # type: ignore[attr-defined]
# Load the exposed API of the collaborators
__all__ += aliases.__all__ + config.__all__ + console.__all__ + context.__all__ + printer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
