from .dataset_binder import DatasetBinder

__all__ = ["DatasetBinder"]
