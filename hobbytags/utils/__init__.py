"""
Utility modules for hobbytags.

Cross-cutting concerns:
- Embeddings: Generate embeddings for hobby keyword strings
- Storage: JSON artifact I/O
"""
