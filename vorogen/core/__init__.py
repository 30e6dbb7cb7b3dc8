"""vorogen.core — Foundation layer.

Contains the data types, palette, seed generation, rasterizer, writer,
configuration and report builder.
This module has NO dependencies on vorogen.metrics or vorogen.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
