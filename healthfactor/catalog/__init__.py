from .subgraph import SubgraphCatalog

__all__ = ["SubgraphCatalog"]
