__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'cmdtree'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .consumer import *
from .extractor import *
from .faults import *
from .helps import *
from .records import *
from .runner import *
from .schema import *
from .tree import *

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

# Load the exposed API of the schema builders
__all__ += schema.__all__  # type: ignore[attr-defined]
# Load the exposed API of the command tree
__all__ += tree.__all__  # type: ignore[attr-defined]
# Load the exposed API of the records
__all__ += records.__all__  # type: ignore[attr-defined]
# Load the exposed API of the extractor
__all__ += extractor.__all__  # type: ignore[attr-defined]
# Load the exposed API of the consumer
__all__ += consumer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the helps
__all__ += helps.__all__  # type: ignore[attr-defined]
# Load the exposed API of the runner
__all__ += runner.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
