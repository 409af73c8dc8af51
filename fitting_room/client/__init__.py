from .form import SelectedFile, Slot, TryOnFormController

__all__ = ["SelectedFile", "Slot", "TryOnFormController"]
