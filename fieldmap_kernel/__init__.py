"""
fieldmap kernel

Runtime entity metadata and the supporting pieces for metadata-driven
field assignment:
- Entity and field descriptors with an in-memory schema registry
- A SQLAlchemy-backed schema over declarative models
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
