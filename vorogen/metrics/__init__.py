"""Distance metrics.

Every public module here that defines a module-level `metric` is picked up
by vorogen.registry.discover(). Command names come from Metric.name and help
text from the module docstring.
"""
