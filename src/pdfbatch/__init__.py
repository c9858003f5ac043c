"""pdfbatch - Single-action batch transformations on archived PDF jobs."""

import logging

__version__ = "0.1.0"
__all__ = ["__version__"]

# Prevent "No handler found" warnings when used as a library
logging.getLogger("pdfbatch").addHandler(logging.NullHandler())
