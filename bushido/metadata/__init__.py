"""Off-chain metadata generation.

Quick usage::

    from bushido.metadata import MetadataGenerator

    generator = MetadataGenerator()
    print(generator.render(1))
    paths = await generator.generate_all("/tmp/metadata")
"""

from bushido.metadata.generator import MetadataAttribute, MetadataGenerator, TokenMetadata

__all__ = [
    "MetadataAttribute",
    "MetadataGenerator",
    "TokenMetadata",
]
