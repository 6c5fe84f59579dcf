"""Controller layer: mediates between UI widgets and the arrangement model.

This package contains:
- binding: TemplateBinding keeping the selected template's items and the store in step
- reconciler: ArrangementReconciler loading and persisting saved tier lists
- Event handler mixins for different UI areas
"""

from controller.binding import CatalogRequest, TemplateBinding
from controller.reconciler import ArrangementReconciler, save_current_arrangement
from controller.board import BoardEventsMixin
from controller.templates import TemplateEventsMixin, validate_new_template
from controller.arrangements import ArrangementEventsMixin
from controller.session import SessionEventsMixin

__all__ = [
    # Binding and persistence
    "CatalogRequest",
    "TemplateBinding",
    "ArrangementReconciler",
    "save_current_arrangement",
    "validate_new_template",
    # Event mixins
    "ArrangementEventsMixin",
    "BoardEventsMixin",
    "SessionEventsMixin",
    "TemplateEventsMixin",
]
