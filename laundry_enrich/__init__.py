"""
Laundromat listing enrichment pipeline

Cleans, deduplicates and SEO-annotates raw laundromat CSV exports.
"""

__version__ = "1.0.0"
