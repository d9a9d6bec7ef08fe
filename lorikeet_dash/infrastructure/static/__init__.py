from .bundle import StaticAsset, StaticBundle

__all__ = ["StaticAsset", "StaticBundle"]
