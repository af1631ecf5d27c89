"""Static assets inlined into rendered reports."""
