"""
Preference reconciliation.

Merges built-in option lists with each user's custom additions and removals
for seasonings, equipment, cuisines and dietary restrictions.
"""

from .categories import Category, CategorySpec, get_spec
from .reconciler import CategoryReconciler, reconcile
from .record import CategoryRecord, PreferenceRecord
from .service import PreferenceService
from .store import PreferenceStore

__all__ = [
    "Category",
    "CategorySpec",
    "CategoryReconciler",
    "CategoryRecord",
    "PreferenceRecord",
    "PreferenceService",
    "PreferenceStore",
    "get_spec",
    "reconcile",
]
