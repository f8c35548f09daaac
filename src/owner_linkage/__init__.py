"""Owner Linkage - record reconciliation for donor and property-appraisal data.

Scores the similarity of heterogeneous, partially-populated person, household
and owner records, and resolves property records that collide on a shared
fire number.
"""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "models":
        from owner_linkage import models
        return models
    if name == "similarity":
        from owner_linkage import similarity
        return similarity
    if name == "collision":
        from owner_linkage import collision
        return collision
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
