"""Building blocks for a supermarket checkout simulation: customers, queues, registers, statistics and reports."""

__version__ = "0.1.0"