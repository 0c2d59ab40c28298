"""
hobbytags - survey hobby text tagging pipeline.
"""

__version__ = "1.0.0"
