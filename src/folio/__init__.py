"""
Folio - result algebra and failure reporting for static site builds.

- folio.core: results, aggregation, rendering, sinks, batches
- folio.site: post/page collaborators that produce and consume results
- folio.cli: the ``folio`` command line
"""

__version__ = "0.1.0"

from folio.core import *  # noqa
