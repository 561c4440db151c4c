"""Build-step artifact generation.

Renders the collection's Solidity contract from the assignment engine's
constants.

Quick usage::

    from bushido.scaffolder import ContractGenerator

    generator = ContractGenerator()
    path = await generator.write("/tmp/contracts")
"""

from bushido.scaffolder.contract import ContractGenerator
from bushido.scaffolder.templates import TemplateRenderer

__all__ = [
    "ContractGenerator",
    "TemplateRenderer",
]
