"""
Generators — produce derived files from the pipeline definition.

Each generator exposes a ``generate_*()`` function that returns a
``RenderedArtifact`` with its destination set.
"""
