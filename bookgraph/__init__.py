"""
bookgraph: a coherent Book/Author graph over two independent record stores.
"""

__version__ = "0.1.0"
