"""Currency units and the process-wide registry resolving them by ISO code."""
