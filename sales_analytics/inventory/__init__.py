"""
Inventory Module
================

Depletion-rate restock recommendations and catalog stock summaries.
"""

from .restock import RestockItem, RestockRecommender, Urgency, classify_urgency
from .stock_summary import InventorySummarizer, InventorySummary

__all__ = [
    "RestockItem",
    "RestockRecommender",
    "Urgency",
    "classify_urgency",
    "InventorySummarizer",
    "InventorySummary",
]
