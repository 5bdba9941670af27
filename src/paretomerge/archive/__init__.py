from .merge_archive import Archive

__all__ = ["Archive"]
