"""
Quote pricing and consolidation engine.

Pure, synchronous functions. No persistence, no I/O.
A measurement plus a product/variation/add-on selection goes in,
a priced QuoteItem comes out. Consolidation regroups an existing
quote's items for display without changing its total.
"""
