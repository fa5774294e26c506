"""
Enrichment modules for IPLens
"""

from .ip_classifier import IPClassifier, IPType
from .ptr_resolver import PTRResolver
from .lookup import DualSourceLookup, LookupResult

__all__ = ['IPClassifier', 'IPType', 'PTRResolver', 'DualSourceLookup', 'LookupResult']
