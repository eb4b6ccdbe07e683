"""ls3: browse local directories and S3 buckets through one filesystem interface."""

from loguru import logger

from ls3.storage import Entry, FileSystem, LocalFS, S3FS

__version__ = "0.1.0"

# Library logging stays silent until the application calls setup_logging().
logger.disable("ls3")

__all__ = ["Entry", "FileSystem", "LocalFS", "S3FS", "__version__"]
