"""coverhtml: render Go coverage profiles as a static HTML report."""

__version__ = "0.1.0"
