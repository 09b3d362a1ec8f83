"""Build Registry - in-process bookkeeping of image build metadata.

This package tracks per-component build records for a single pipeline run
so that artifact metadata can be reported to a remote artifact registry.
"""

from build_registry.bucket import Bucket
from build_registry.iteration import Iteration, IterationOptions
from build_registry.models import Artifact, Build, BuildSnapshot

__version__ = "0.1.0"
__all__ = [
    "Artifact",
    "Bucket",
    "Build",
    "BuildSnapshot",
    "Iteration",
    "IterationOptions",
    "__version__",
]
