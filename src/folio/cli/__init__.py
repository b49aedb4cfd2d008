"""Command line interface for folio (``folio``)."""
