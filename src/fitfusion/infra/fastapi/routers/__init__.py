"""Routers contributed through the ``fitfusion.routers`` entry-point group."""
