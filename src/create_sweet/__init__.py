"""create-sweet - scaffold a new project from a Sweet Starter template."""

import logging

__version__ = "0.3.0"

# User-facing messages go through the rich console; log records are only
# emitted once --verbose configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())
