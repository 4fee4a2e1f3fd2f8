"""Training analytics core.

Pure transformations behind the training dashboards: state canonicalization,
muscle usage aggregation, session compliance and fatigue/risk timelines.
"""

__version__ = "0.1.0"
