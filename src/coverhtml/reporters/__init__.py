"""Report assembly, rendering and output."""
