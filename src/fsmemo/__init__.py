"""fsmemo - memoized filesystem access and best-effort module loading."""

from .__version__ import __version__, __version_info__, get_version_string
from .api import (
    default_filesystem,
    default_finder,
    file_exists,
    get_files,
    get_folders,
    get_yaml,
    is_directory,
    read_file,
    read_file_async,
    reset_caches,
    try_resolve_each,
    try_resolve_module,
)
from .cache import CacheRegistry, CacheStats, MemoCache, memoized
from .config import FsMemoSettings
from .error_handling import (
    ConfigurationError,
    DocumentParseError,
    ErrorContext,
    FsMemoError,
    ModuleLoadError,
)
from .filesystem import FileSystem
from .resolver import ImportlibResolver, ModuleFinder, ModuleLocation, ModuleResolver
from .storage import FileBackend, LocalFileBackend

__all__ = [
    # Default instance functions
    "file_exists",
    "read_file",
    "is_directory",
    "get_files",
    "get_folders",
    "get_yaml",
    "read_file_async",
    "try_resolve_module",
    "try_resolve_each",
    "reset_caches",
    "default_filesystem",
    "default_finder",
    # Components
    "FileSystem",
    "FileBackend",
    "LocalFileBackend",
    "ModuleFinder",
    "ModuleResolver",
    "ImportlibResolver",
    "ModuleLocation",
    # Caching
    "MemoCache",
    "CacheRegistry",
    "CacheStats",
    "memoized",
    # Config
    "FsMemoSettings",
    # Errors
    "FsMemoError",
    "ModuleLoadError",
    "DocumentParseError",
    "ConfigurationError",
    "ErrorContext",
    # Version info
    "__version__",
    "__version_info__",
    "get_version_string",
]
